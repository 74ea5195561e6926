"""
Path post-processing for routed polylines.

- Convert grid cells to world coordinates
- Split diagonal segments into orthogonal ones
- Compress collinear runs and duplicate points
- Clamp into the room
- Validate against rectangles and room bounds
"""

from typing import List, Optional, Sequence, Tuple

from ..core.geometry import Point, clamp_to_room, segment_intersects_rect
from ..core.models import Rectangle, Room
from .grid import GridCell, grid_to_world


def cells_to_world(cells: Sequence[GridCell], cell_size: float) -> List[Point]:
    """
    Convert grid cells to world coordinates.

    Args:
        cells: Path from pathfinding
        cell_size: Grid cell size in pixels

    Returns:
        List of (x, y) world coordinates
    """
    return [grid_to_world(cell, cell_size) for cell in cells]


def _orientation(a: Point, b: Point) -> Optional[str]:
    """'h', 'v', or None for coincident or diagonal pairs."""
    if a == b:
        return None
    if a[1] == b[1]:
        return 'h'
    if a[0] == b[0]:
        return 'v'
    return None


def simplify_path(points: Sequence[Point]) -> List[Point]:
    """
    Compress path by merging collinear segments.

    Drops consecutive duplicates and every interior point where the path
    keeps its orientation. A reversal along the same line collapses into
    a single segment.

    Args:
        points: Raw polyline

    Returns:
        Polyline with minimal waypoints
    """
    result: List[Point] = []

    for point in points:
        if result and point == result[-1]:
            continue

        if len(result) >= 2:
            prev_orientation = _orientation(result[-2], result[-1])
            if prev_orientation is not None and prev_orientation == _orientation(result[-1], point):
                result[-1] = point
                if result[-1] == result[-2]:
                    result.pop()
                continue

        result.append(point)

    return result


def enforce_orthogonal(points: Sequence[Point]) -> List[Point]:
    """
    Split every diagonal segment into horizontal-then-vertical.

    Args:
        points: Polyline that may contain diagonals

    Returns:
        Polyline where every consecutive pair shares x or y
    """
    if not points:
        return []

    result = [points[0]]
    for x2, y2 in points[1:]:
        x1, y1 = result[-1]
        if x1 != x2 and y1 != y2:
            result.append((x2, y1))
        result.append((x2, y2))

    return result


def clamp_path(points: Sequence[Point], room: Room) -> List[Point]:
    """Clamp every vertex into the room bounds."""
    return [clamp_to_room(x, y, room) for x, y in points]


def finalize_path(points: Sequence[Point], room: Room) -> List[Point]:
    """Orthogonalize, clamp and simplify a route before it is returned."""
    return simplify_path(clamp_path(enforce_orthogonal(points), room))


def path_in_room(points: Sequence[Point], room: Room) -> bool:
    """Check that every vertex lies inside the room."""
    return all(room.contains(x, y) for x, y in points)


def find_collision(
    points: Sequence[Point],
    rects: Sequence[Rectangle],
    from_rect_id: Optional[str] = None,
    to_rect_id: Optional[str] = None,
    margin: float = 0
) -> Optional[Tuple[int, str]]:
    """
    Find the first segment that passes through a rectangle.

    The first segment may touch the from-rectangle and the last segment
    the to-rectangle, since they connect to their own dock points.

    Args:
        points: Polyline
        rects: Obstacles
        from_rect_id: Rectangle owning the first dock point
        to_rect_id: Rectangle owning the last dock point
        margin: Clearance added around every rectangle

    Returns:
        (segment index, rectangle id) of the first collision, or None
    """
    last_index = len(points) - 2

    for i in range(len(points) - 1):
        x1, y1 = points[i]
        x2, y2 = points[i + 1]

        for rect in rects:
            if i == 0 and rect.id == from_rect_id:
                continue
            if i == last_index and rect.id == to_rect_id:
                continue
            if segment_intersects_rect(x1, y1, x2, y2, rect, margin):
                return (i, rect.id)

    return None


def validate_route(
    points: Sequence[Point],
    rects: Sequence[Rectangle],
    room: Room,
    from_rect_id: Optional[str] = None,
    to_rect_id: Optional[str] = None,
    margin: float = 0
) -> bool:
    """
    Validate that a route stays in the room and clear of rectangles.

    Returns:
        True if the route is usable, False otherwise
    """
    if len(points) < 2:
        return False
    if not path_in_room(points, room):
        return False
    return find_collision(points, rects, from_rect_id, to_rect_id, margin) is None
