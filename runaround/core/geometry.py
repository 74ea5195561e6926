"""
Geometry helpers shared by the router, the overlap resolver and the exporters
"""

from typing import List, Optional, Sequence, Tuple

from .models import DockSide, Rectangle, Room

Point = Tuple[float, float]


def get_dock_point(rect: Rectangle, side: DockSide) -> Point:
    """Midpoint of the given side of a rectangle."""
    side = DockSide(side)
    if side == DockSide.TOP:
        return (rect.x + rect.width / 2, rect.y)
    if side == DockSide.RIGHT:
        return (rect.x + rect.width, rect.y + rect.height / 2)
    if side == DockSide.BOTTOM:
        return (rect.x + rect.width / 2, rect.y + rect.height)
    return (rect.x, rect.y + rect.height / 2)


def find_rectangle(rects: Sequence[Rectangle], rect_id: str) -> Optional[Rectangle]:
    """Return the rectangle with the given id, or None."""
    for rect in rects:
        if rect.id == rect_id:
            return rect
    return None


def clamp_to_room(x: float, y: float, room: Room) -> Point:
    """Clamp a point into the room bounds."""
    return (max(0, min(room.width, x)), max(0, min(room.height, y)))


def manhattan_length(points: Sequence[float]) -> int:
    """
    Total horizontal plus vertical travel of a flat coordinate list

    Args:
        points: Flat [x0, y0, x1, y1, ...] list

    Returns:
        Rounded path length in pixels
    """
    total = 0.0
    for i in range(0, len(points) - 2, 2):
        total += abs(points[i + 2] - points[i]) + abs(points[i + 3] - points[i + 1])
    return int(round(total))


def segment_intersects_rect(
    x1: float, y1: float,
    x2: float, y2: float,
    rect: Rectangle,
    margin: float = 0
) -> bool:
    """
    Check if an axis-aligned segment passes through the interior of a rectangle.

    Running along an edge or touching a corner does not count as an intersection.
    Diagonal segments are tested by their bounding box.

    Args:
        x1, y1: Segment start
        x2, y2: Segment end
        rect: Obstacle
        margin: Extra clearance added around the rectangle

    Returns:
        True if the segment enters the (expanded) rectangle's open interior
    """
    left = rect.x - margin
    right = rect.x2 + margin
    top = rect.y - margin
    bottom = rect.y2 + margin

    min_x, max_x = min(x1, x2), max(x1, x2)
    min_y, max_y = min(y1, y2), max(y1, y2)

    if y1 == y2:
        return top < y1 < bottom and max_x > left and min_x < right
    if x1 == x2:
        return left < x1 < right and max_y > top and min_y < bottom

    return max_x > left and min_x < right and max_y > top and min_y < bottom


def flatten_points(points: Sequence[Point]) -> List[float]:
    """Convert [(x, y), ...] into [x, y, ...]."""
    flat: List[float] = []
    for x, y in points:
        flat.extend((x, y))
    return flat


def pair_points(flat: Sequence[float]) -> List[Point]:
    """Convert [x, y, ...] into [(x, y), ...]; a trailing odd value is ignored."""
    return [(flat[i], flat[i + 1]) for i in range(0, len(flat) - 1, 2)]


def is_orthogonal(points: Sequence[Point]) -> bool:
    """Check that every consecutive pair shares x or y."""
    return all(
        a[0] == b[0] or a[1] == b[1]
        for a, b in zip(points, points[1:])
    )
