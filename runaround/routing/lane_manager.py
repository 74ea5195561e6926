"""
Lane assignment for overlapping path segments.

When several routed paths share a collinear, overlapping segment, each
path gets a lateral offset for that segment based on its position in the
draw order, so the paths render as parallel lanes instead of on top of
each other. Offsets are display-only; stored path points never change.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass

DEFAULT_SPACING = 6
DEFAULT_BASE_THICKNESS = 2
COLLINEAR_EPSILON = 0.5


@dataclass(frozen=True)
class Segment:
    """Represents a line segment between two points."""
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2

    @property
    def fixed_coordinate(self) -> float:
        """y for horizontal segments, x for vertical ones."""
        return self.y1 if self.is_horizontal else self.x1

    @property
    def span(self) -> Tuple[float, float]:
        """(min, max) along the segment's axis."""
        if self.is_horizontal:
            return (min(self.x1, self.x2), max(self.x1, self.x2))
        return (min(self.y1, self.y2), max(self.y1, self.y2))


@dataclass(frozen=True)
class SegmentOffset:
    """Lane assignment for one segment of a path."""
    segment_index: int
    is_horizontal: bool
    rank: int
    offset: float

    @property
    def dx(self) -> float:
        """Horizontal displacement (vertical segments move sideways)."""
        return 0.0 if self.is_horizontal else self.offset

    @property
    def dy(self) -> float:
        """Vertical displacement (horizontal segments move up/down)."""
        return self.offset if self.is_horizontal else 0.0


@dataclass(frozen=True)
class SegmentThickness:
    """Stroke width for one segment, grown by the number of overlapping paths."""
    segment: Segment
    segment_index: int
    overlap_count: int
    thickness: float


def segments_from_points(points: Sequence[float]) -> List[Segment]:
    """
    Split a flat coordinate list into segments.

    Args:
        points: Flat [x0, y0, x1, y1, ...] list

    Returns:
        One Segment per consecutive point pair
    """
    return [
        Segment(points[i], points[i + 1], points[i + 2], points[i + 3])
        for i in range(0, len(points) - 3, 2)
    ]


def segments_overlap(seg1: Segment, seg2: Segment, epsilon: float = COLLINEAR_EPSILON) -> bool:
    """
    Check if two segments lie on the same axis-aligned line and share a stretch of it.

    Touching end to end is not an overlap.
    """
    if seg1.is_horizontal != seg2.is_horizontal:
        return False
    if abs(seg1.fixed_coordinate - seg2.fixed_coordinate) > epsilon:
        return False

    min1, max1 = seg1.span
    min2, max2 = seg2.span
    return max1 > min2 and max2 > min1


def is_valid_path(points: Optional[Sequence[float]]) -> bool:
    """A path takes part in overlap resolution once it has at least two points."""
    return points is not None and len(points) >= 4


def draw_sequence(paths: Mapping[str, Sequence[float]], draw_order: Sequence[str]) -> List[str]:
    """
    Ids of valid paths in drawing order.

    Paths missing from ``draw_order`` are drawn after the ordered ones,
    in mapping order. Unknown and duplicate ids in ``draw_order`` are ignored.
    """
    sequence: List[str] = []
    seen = set()

    for path_id in draw_order:
        if path_id in seen or not is_valid_path(paths.get(path_id)):
            continue
        seen.add(path_id)
        sequence.append(path_id)

    for path_id, points in paths.items():
        if path_id not in seen and is_valid_path(points):
            seen.add(path_id)
            sequence.append(path_id)

    return sequence


def compute_lane_offsets(
    path_id: str,
    paths: Mapping[str, Sequence[float]],
    draw_order: Sequence[str],
    spacing: float = DEFAULT_SPACING,
    epsilon: float = COLLINEAR_EPSILON
) -> List[SegmentOffset]:
    """
    Compute per-segment lane offsets for one path.

    A segment's rank is the number of paths drawn before this one that have
    at least one collinear, overlapping segment. The offset is rank * spacing,
    perpendicular to the segment.

    Args:
        path_id: Path to compute offsets for
        paths: Mapping of path id to flat coordinate list
        draw_order: Path ids in drawing order
        spacing: Distance between lanes
        epsilon: Tolerance for collinear segments

    Returns:
        One SegmentOffset per segment; empty if the path is not valid
    """
    sequence = draw_sequence(paths, draw_order)
    if path_id not in sequence:
        return []

    earlier = [segments_from_points(paths[other]) for other in sequence[:sequence.index(path_id)]]

    offsets = []
    for index, segment in enumerate(segments_from_points(paths[path_id])):
        rank = sum(
            1 for other_segments in earlier
            if any(segments_overlap(segment, other, epsilon) for other in other_segments)
        )
        offsets.append(SegmentOffset(
            segment_index=index,
            is_horizontal=segment.is_horizontal,
            rank=rank,
            offset=rank * spacing,
        ))

    return offsets


def compute_all_lane_offsets(
    paths: Mapping[str, Sequence[float]],
    draw_order: Sequence[str],
    spacing: float = DEFAULT_SPACING,
    epsilon: float = COLLINEAR_EPSILON
) -> Dict[str, List[SegmentOffset]]:
    """Lane offsets for every valid path, keyed by path id in drawing order."""
    return {
        path_id: compute_lane_offsets(path_id, paths, draw_order, spacing, epsilon)
        for path_id in draw_sequence(paths, draw_order)
    }


def apply_lane_offsets(points: Sequence[float], offsets: Sequence[SegmentOffset]) -> List[float]:
    """
    Shift a path's vertices by its segment offsets for display.

    Each vertex takes the perpendicular displacement of the segments it
    belongs to, so a corner between a horizontal and a vertical segment
    moves in both axes and the shifted path stays orthogonal.

    Args:
        points: Flat coordinate list
        offsets: Result of compute_lane_offsets for the same path

    Returns:
        New flat coordinate list (the input is left untouched)
    """
    shifted = list(points)
    vertex_count = len(points) // 2
    dx = [0.0] * vertex_count
    dy = [0.0] * vertex_count

    for entry in offsets:
        for vertex in (entry.segment_index, entry.segment_index + 1):
            if vertex >= vertex_count:
                continue
            if entry.is_horizontal:
                dy[vertex] = entry.dy
            else:
                dx[vertex] = entry.dx

    for vertex in range(vertex_count):
        shifted[2 * vertex] += dx[vertex]
        shifted[2 * vertex + 1] += dy[vertex]

    return shifted


def segment_thicknesses(
    path_points: Sequence[float],
    all_paths: Sequence[Sequence[float]],
    base_thickness: float = DEFAULT_BASE_THICKNESS,
    epsilon: float = COLLINEAR_EPSILON
) -> List[SegmentThickness]:
    """
    Stroke width per segment, growing with the number of overlapping segments.

    Alternative to lane offsets: instead of separating overlapping paths,
    the shared stretch is drawn thicker.

    Args:
        path_points: Path to measure
        all_paths: Every path of the layout (the path itself is skipped by identity)
        base_thickness: Width of a segment nobody else uses
        epsilon: Tolerance for collinear segments

    Returns:
        One SegmentThickness per segment
    """
    other_segments: List[Segment] = []
    for other in all_paths:
        if other is path_points:
            continue
        other_segments.extend(segments_from_points(other))

    result = []
    for index, segment in enumerate(segments_from_points(path_points)):
        count = 1 + sum(1 for other in other_segments if segments_overlap(segment, other, epsilon))
        result.append(SegmentThickness(
            segment=segment,
            segment_index=index,
            overlap_count=count,
            thickness=count * base_thickness,
        ))

    return result


def overlap_counts(
    all_paths: Sequence[Sequence[float]],
    epsilon: float = COLLINEAR_EPSILON
) -> Dict[str, int]:
    """
    Count overlapping segment pairs per shared stretch.

    Keys are ``h:<y>:<min x>:<max x>`` or ``v:<x>:<min y>:<max y>`` describing
    the shared stretch; values start at 2 for the first overlapping pair and
    grow by one per additional pair on the same stretch.

    Args:
        all_paths: Flat coordinate lists of every path

    Returns:
        Mapping of stretch key to count
    """
    segments: List[Segment] = []
    for points in all_paths:
        segments.extend(segments_from_points(points))

    counts: Dict[str, int] = {}
    for i in range(len(segments)):
        for j in range(i + 1, len(segments)):
            seg1 = segments[i]
            seg2 = segments[j]
            if not segments_overlap(seg1, seg2, epsilon):
                continue

            lo = max(seg1.span[0], seg2.span[0])
            hi = min(seg1.span[1], seg2.span[1])
            prefix = 'h' if seg1.is_horizontal else 'v'
            key = f"{prefix}:{seg1.fixed_coordinate:g}:{lo:g}:{hi:g}"
            counts[key] = counts.get(key, 1) + 1

    return counts
