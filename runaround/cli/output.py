"""
Output formatting and printing utilities for CLI
"""

from typing import Dict, List, Mapping

from ..core.geometry import manhattan_length
from ..persistence.schema import ProjectData
from ..routing.lane_manager import SegmentOffset


def print_separator(width: int = 70, char: str = '=') -> None:
    """
    Print a separator line

    Args:
        width: Width of the separator
        char: Character to use for separator
    """
    print(char * width)


def print_route_summary(project: ProjectData, results: Mapping[str, List[float]]) -> None:
    """
    Print one line per path in draw order

    Args:
        project: Project after recompute
        results: Paths routed in this run, keyed by path id
    """
    print_separator()
    print(f"🧭 Routed {len(results)} of {len(project.paths)} paths")
    print_separator(char='-')

    for number, path in enumerate(project.ordered_paths(), start=1):
        if path.id in results:
            status = '✓'
        elif path.is_manually_edited:
            status = '✎ manual'
        else:
            status = '⚠️ unresolved'
        bends = max(len(path.points) // 2 - 2, 0)
        print(f"  {number:>3}. {path.id:<20} {manhattan_length(path.points):>6} px  {bends:>2} bends  {status}")

    print_separator()


def print_lane_offsets(offsets: Dict[str, List[SegmentOffset]]) -> None:
    """
    Print the non-zero lane offsets of every path

    Args:
        offsets: Output of compute_all_lane_offsets
    """
    print_separator()
    print(f"🛣️  Lane offsets for {len(offsets)} paths")
    print_separator(char='-')

    for path_id, segments in offsets.items():
        shifted = [segment for segment in segments if segment.rank > 0]
        if not shifted:
            print(f"  {path_id}: no overlaps")
            continue

        print(f"  {path_id}:")
        for segment in shifted:
            axis = 'y' if segment.is_horizontal else 'x'
            print(f"    segment {segment.segment_index}: rank {segment.rank}, {axis} +{segment.offset:g}")

    print_separator()
