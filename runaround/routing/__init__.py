"""
Grid-based A* routing system for room layouts.

Routes orthogonal paths between dock points on rectangles and assigns
lane offsets to paths that share collinear segments.
"""

from .grid import GridCell, ObstacleGrid, build_obstacle_grid, world_to_grid, grid_to_world
from .astar import astar
from .path_optimizer import simplify_path, enforce_orthogonal, validate_route
from .router import route_path, route_points, build_fallback_route, loop_at_dock
from .lane_manager import (
    SegmentOffset,
    compute_lane_offsets,
    compute_all_lane_offsets,
    apply_lane_offsets,
    segment_thicknesses,
    overlap_counts,
)

__all__ = [
    'GridCell',
    'ObstacleGrid',
    'build_obstacle_grid',
    'world_to_grid',
    'grid_to_world',
    'astar',
    'simplify_path',
    'enforce_orthogonal',
    'validate_route',
    'route_path',
    'route_points',
    'build_fallback_route',
    'loop_at_dock',
    'SegmentOffset',
    'compute_lane_offsets',
    'compute_all_lane_offsets',
    'apply_lane_offsets',
    'segment_thicknesses',
    'overlap_counts',
]
