"""
Batch recompute of every automatically routed path in a project
"""

import logging
from typing import Dict, List, Optional

from ..persistence.schema import ProjectData
from ..routing.router import route_path
from .config import DEFAULT_CONFIG, RouterConfig
from .geometry import find_rectangle

logger = logging.getLogger(__name__)


def recompute_paths(project: ProjectData, config: Optional[RouterConfig] = None) -> Dict[str, List[float]]:
    """
    Route every path of a project in draw order

    Manually edited paths keep their stored points and are skipped, as are
    paths whose rectangles no longer exist. The project is not modified.

    Args:
        project: Project snapshot
        config: Router configuration

    Returns:
        Mapping of path id to freshly routed points, in draw order
    """
    config = config or DEFAULT_CONFIG
    room, rects = project.to_layout()

    results: Dict[str, List[float]] = {}
    skipped_manual = 0
    skipped_missing = 0

    for path in project.ordered_paths():
        if path.is_manually_edited:
            skipped_manual += 1
            continue

        from_dock = path.from_dock
        to_dock = path.to_dock
        if find_rectangle(rects, from_dock.rect_id) is None or find_rectangle(rects, to_dock.rect_id) is None:
            skipped_missing += 1
            continue

        results[path.id] = route_path(from_dock, to_dock, rects, room, config)

    logger.info(
        f"Recomputed {len(results)} paths "
        f"(skipped {skipped_manual} manually edited, {skipped_missing} unresolved)"
    )
    return results


def apply_recomputed(project: ProjectData, results: Dict[str, List[float]]) -> ProjectData:
    """
    Return a copy of the project with recomputed points written back

    Args:
        project: Original project (left untouched)
        results: Output of recompute_paths

    Returns:
        Updated copy of the project
    """
    updated = project.model_copy(deep=True)
    for path in updated.paths:
        if path.id in results:
            path.points = list(results[path.id])
    return updated
