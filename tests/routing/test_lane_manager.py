"""
Tests for lane offsets and overlap measurement
"""

import pytest
from hypothesis import given, strategies as st, settings

from runaround.routing.lane_manager import (
    Segment,
    SegmentOffset,
    apply_lane_offsets,
    compute_all_lane_offsets,
    compute_lane_offsets,
    draw_sequence,
    is_valid_path,
    overlap_counts,
    segment_thicknesses,
    segments_from_points,
    segments_overlap,
)


@pytest.fixture
def corridor_paths():
    """Three paths sharing one horizontal corridor at y=100"""
    return {
        'P1': [0, 100, 200, 100],
        'P2': [50, 50, 50, 100, 250, 100],
        'P3': [20, 100, 180, 100, 180, 300],
    }


class TestSegments:
    """Test suite for segment helpers"""

    def test_segments_from_points(self):
        segments = segments_from_points([0, 0, 10, 0, 10, 20])
        assert segments == [Segment(0, 0, 10, 0), Segment(10, 0, 10, 20)]
        assert segments[0].is_horizontal
        assert not segments[1].is_horizontal
        assert segments[1].fixed_coordinate == 10
        assert segments[1].span == (0, 20)

    def test_overlap_requires_shared_stretch(self):
        assert segments_overlap(Segment(0, 0, 100, 0), Segment(50, 0, 150, 0))
        assert segments_overlap(Segment(100, 0, 0, 0), Segment(20, 0, 30, 0))

    def test_touching_end_to_end_is_not_overlap(self):
        assert not segments_overlap(Segment(0, 0, 100, 0), Segment(100, 0, 200, 0))

    def test_different_orientation_never_overlaps(self):
        assert not segments_overlap(Segment(0, 0, 100, 0), Segment(50, -10, 50, 10))

    def test_collinear_tolerance(self):
        assert segments_overlap(Segment(0, 100, 100, 100), Segment(0, 100.4, 100, 100.4))
        assert not segments_overlap(Segment(0, 100, 100, 100), Segment(0, 101, 100, 101))
        assert segments_overlap(Segment(0, 100, 100, 100), Segment(0, 101, 100, 101), epsilon=2)

    def test_is_valid_path(self):
        assert is_valid_path([0, 0, 10, 0])
        assert not is_valid_path([0, 0])
        assert not is_valid_path([])
        assert not is_valid_path(None)

    def test_draw_sequence_appends_unordered_paths(self):
        paths = {'a': [0, 0, 1, 0], 'b': [0, 0, 1, 0], 'c': [0, 0, 1, 0], 'd': []}
        assert draw_sequence(paths, ['c', 'x', 'c', 'd']) == ['c', 'a', 'b']


class TestLaneOffsets:
    """Test suite for draw-order lane stacking"""

    def test_corridor_offsets_stack_by_draw_order(self, corridor_paths):
        """Later paths sharing the corridor move one spacing further each"""
        order = ['P1', 'P2', 'P3']

        p1 = compute_lane_offsets('P1', corridor_paths, order, spacing=6)
        p2 = compute_lane_offsets('P2', corridor_paths, order, spacing=6)
        p3 = compute_lane_offsets('P3', corridor_paths, order, spacing=6)

        assert [entry.offset for entry in p1] == [0]
        assert [entry.offset for entry in p2] == [0, 6]
        assert [entry.offset for entry in p3] == [12, 0]
        assert p3[0] == SegmentOffset(segment_index=0, is_horizontal=True, rank=2, offset=12)

    def test_draw_order_decides_rank(self, corridor_paths):
        order = ['P3', 'P2', 'P1']
        p1 = compute_lane_offsets('P1', corridor_paths, order, spacing=8)
        p3 = compute_lane_offsets('P3', corridor_paths, order, spacing=8)

        assert p1[0].offset == 16
        assert p3[0].offset == 0

    def test_disjoint_paths_have_no_offset(self):
        paths = {'a': [0, 0, 100, 0], 'b': [0, 50, 100, 50]}
        offsets = compute_all_lane_offsets(paths, ['a', 'b'])

        assert all(entry.offset == 0 for entries in offsets.values() for entry in entries)

    def test_rank_counts_paths_not_segments(self):
        """A path overlapping twice with the same earlier path adds one lane"""
        paths = {
            'a': [0, 0, 100, 0, 100, 100],
            'b': [10, 0, 90, 0],
        }
        offsets = compute_lane_offsets('b', paths, ['a', 'b'], spacing=5)
        assert offsets[0].rank == 1

    def test_unknown_or_invalid_path(self, corridor_paths):
        assert compute_lane_offsets('nope', corridor_paths, ['P1']) == []
        assert compute_lane_offsets('x', {'x': [1, 1]}, ['x']) == []

    def test_compute_all_keeps_draw_order(self, corridor_paths):
        offsets = compute_all_lane_offsets(corridor_paths, ['P2', 'P1'])
        assert list(offsets) == ['P2', 'P1', 'P3']

    def test_offsets_are_reproducible(self, corridor_paths):
        order = ['P1', 'P2', 'P3']
        assert compute_all_lane_offsets(corridor_paths, order) == compute_all_lane_offsets(corridor_paths, order)

    def test_stored_points_untouched(self, corridor_paths):
        before = {key: list(value) for key, value in corridor_paths.items()}
        compute_all_lane_offsets(corridor_paths, ['P1', 'P2', 'P3'])
        assert corridor_paths == before

    def test_offset_direction(self):
        horizontal = SegmentOffset(0, True, 1, 6)
        vertical = SegmentOffset(1, False, 2, 12)

        assert (horizontal.dx, horizontal.dy) == (0.0, 6)
        assert (vertical.dx, vertical.dy) == (12, 0.0)


class TestApplyLaneOffsets:
    """Test suite for display coordinates"""

    def test_shifted_copy(self, corridor_paths):
        order = ['P1', 'P2', 'P3']
        offsets = compute_lane_offsets('P2', corridor_paths, order, spacing=6)

        shifted = apply_lane_offsets(corridor_paths['P2'], offsets)

        assert shifted == [50, 50, 50, 106, 250, 106]
        assert corridor_paths['P2'] == [50, 50, 50, 100, 250, 100]

    def test_corners_shift_in_both_axes(self):
        points = [0, 0, 100, 0, 100, 100]
        offsets = [SegmentOffset(0, True, 1, 6), SegmentOffset(1, False, 1, 6)]

        assert apply_lane_offsets(points, offsets) == [0, 6, 106, 6, 106, 100]

    def test_no_offsets(self):
        assert apply_lane_offsets([0, 0, 10, 0], []) == [0, 0, 10, 0]


class TestOverlapMeasurement:
    """Test suite for the thickness-based overlap view"""

    def test_segment_thicknesses(self, corridor_paths):
        all_paths = list(corridor_paths.values())
        thicknesses = segment_thicknesses(corridor_paths['P1'], all_paths, base_thickness=2)

        assert len(thicknesses) == 1
        assert thicknesses[0].overlap_count == 3
        assert thicknesses[0].thickness == 6

    def test_lone_segment_keeps_base_thickness(self, corridor_paths):
        all_paths = list(corridor_paths.values())
        thicknesses = segment_thicknesses(corridor_paths['P2'], all_paths, base_thickness=2)

        assert [entry.thickness for entry in thicknesses] == [2, 6]

    def test_overlap_counts(self):
        counts = overlap_counts([[0, 100, 200, 100], [50, 100, 250, 100], [300, 0, 300, 50]])
        assert counts == {'h:100:50:200': 2}

    def test_overlap_counts_vertical(self):
        counts = overlap_counts([[10, 0, 10, 80], [10, 40, 10, 120]])
        assert counts == {'v:10:40:80': 2}

    def test_no_overlaps(self):
        assert overlap_counts([[0, 0, 10, 0], [0, 5, 10, 5]]) == {}


class TestLaneOffsetsPropertyBased:
    """Property-based tests using Hypothesis"""

    @given(
        st.lists(
            st.tuples(st.integers(0, 200), st.integers(1, 200), st.integers(0, 3)),
            min_size=1, max_size=8,
        ),
        st.sampled_from([4, 6, 8, 12]),
    )
    @settings(max_examples=50, deadline=None)
    def test_property_later_paths_never_stack_lower(self, spans, spacing):
        """Property: On a shared corridor, offsets are multiples of spacing and never exceed the draw index"""
        paths = {
            f"p{index}": [start, row * 10, start + length, row * 10]
            for index, (start, length, row) in enumerate(spans)
        }
        order = list(paths)

        offsets = compute_all_lane_offsets(paths, order, spacing=spacing)

        for index, path_id in enumerate(order):
            entry = offsets[path_id][0]
            assert entry.offset == entry.rank * spacing
            assert 0 <= entry.rank <= index
        assert offsets[order[0]][0].rank == 0
