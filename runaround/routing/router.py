"""
Routing orchestrator.

Routes a path between two dock points:
dock -> stub -> A* grid path -> stub -> dock, retried over a ladder of
grid resolutions, validated against rectangles and room bounds, and
backed by a deterministic edge route when every grid attempt fails.
"""

import logging
from typing import List, Optional, Sequence

from ..core.config import DEFAULT_CONFIG, RouterConfig, RoutingAttempt
from ..core.geometry import (
    Point,
    clamp_to_room,
    find_rectangle,
    flatten_points,
    get_dock_point,
)
from ..core.models import DockPoint, DockSide, Rectangle, Room
from .astar import astar
from .grid import build_obstacle_grid, grid_dimensions, world_to_grid
from .path_optimizer import (
    cells_to_world,
    enforce_orthogonal,
    finalize_path,
    find_collision,
    simplify_path,
    validate_route,
)

logger = logging.getLogger(__name__)


def compute_stub(dock: Point, side, cell_size: float, stub_cells: int, room: Room) -> Point:
    """
    Project a dock point outward along its exit direction, clamped into the room.

    Args:
        dock: Dock point world coordinates
        side: Dock side (DockSide or its string value)
        cell_size: Grid cell size of the current attempt
        stub_cells: Number of cells to project
        room: Room bounds

    Returns:
        Stub point
    """
    dx, dy = DockSide(side).exit_direction
    distance = cell_size * stub_cells
    return clamp_to_room(dock[0] + dx * distance, dock[1] + dy * distance, room)


def try_route(
    from_dock: DockPoint,
    to_dock: DockPoint,
    dock_start: Point,
    dock_end: Point,
    rects: Sequence[Rectangle],
    room: Room,
    attempt: RoutingAttempt,
    config: RouterConfig = DEFAULT_CONFIG
) -> Optional[List[Point]]:
    """
    Run a single grid attempt.

    Args:
        from_dock: Start dock
        to_dock: End dock
        dock_start: Start dock world coordinates
        dock_end: End dock world coordinates
        rects: All rectangles of the layout (all are obstacles)
        room: Room bounds
        attempt: Cell size and margin for this attempt
        config: Router configuration

    Returns:
        Simplified, validated route as a list of points, or None
    """
    cell_size = attempt.cell_size

    stub_start = compute_stub(dock_start, from_dock.side, cell_size, config.stub_cells, room)
    stub_end = compute_stub(dock_end, to_dock.side, cell_size, config.stub_cells, room)

    grid = build_obstacle_grid(room, rects, attempt.margin, cell_size,
                               extra_cells=config.grid_extra_cells)

    start_cell = world_to_grid(stub_start[0], stub_start[1], cell_size)
    end_cell = world_to_grid(stub_end[0], stub_end[1], cell_size)

    # Search endpoints must be free even when a rectangle margin covers them
    grid.unblock(start_cell.x, start_cell.y)
    grid.unblock(end_cell.x, end_cell.y)

    grid_width, grid_height = grid_dimensions(room, cell_size)
    cell_path = astar(
        start_cell, end_cell, grid, grid_width, grid_height,
        base_cost=config.base_cost,
        turn_penalty=config.turn_penalty,
        search_margin=config.search_margin,
        iteration_factor=config.iteration_factor,
    )

    if cell_path is None:
        logger.debug(f"No grid path at cell size {cell_size} (margin {attempt.margin})")
        return None

    # Build full path: dock -> stub -> routed path -> stub -> dock
    waypoints = [dock_start, stub_start]
    waypoints.extend(cells_to_world(cell_path, cell_size))
    waypoints.extend([stub_end, dock_end])

    route = simplify_path(enforce_orthogonal(waypoints))

    if not validate_route(route, rects, room, from_dock.rect_id, to_dock.rect_id,
                          margin=config.validation_margin):
        logger.debug(f"Route at cell size {cell_size} (margin {attempt.margin}) failed validation")
        return None

    return route


def build_fallback_route(
    dock_start: Point,
    from_side,
    from_rect: Rectangle,
    dock_end: Point,
    to_side,
    room: Room,
    margin: float = 10,
    rects: Sequence[Rectangle] = (),
    to_rect_id: Optional[str] = None
) -> List[Point]:
    """
    Construct a search-free route along a room edge.

    The route leaves the source dock by ``margin``, travels to a room edge
    corridor, runs along it, and comes back to the destination's exit stub.
    Sources exiting left/right use the top or bottom edge, sources exiting
    top/bottom use the left or right edge; the edge is the one on the same
    half of the room as the source rectangle's center. When ``rects`` are
    given and that route crosses one of them while the opposite edge is
    clear, the opposite edge is used instead.

    Args:
        dock_start: Start dock world coordinates
        from_side: Start dock side
        from_rect: Rectangle owning the start dock
        dock_end: End dock world coordinates
        to_side: End dock side
        room: Room bounds
        margin: Exit distance from both docks
        rects: Rectangles checked when choosing between the two edges
        to_rect_id: Rectangle owning the end dock

    Returns:
        Orthogonal list of points (not simplified)
    """
    from_side = DockSide(from_side)
    to_side = DockSide(to_side)

    sdx, sdy = from_side.exit_direction
    edx, edy = to_side.exit_direction
    exit_start = clamp_to_room(dock_start[0] + sdx * margin, dock_start[1] + sdy * margin, room)
    exit_end = clamp_to_room(dock_end[0] + edx * margin, dock_end[1] + edy * margin, room)

    center_x, center_y = from_rect.center

    if from_side.is_horizontal_exit:
        near_y = 0 if center_y < room.height / 2 else room.height
        corridors = [
            [(exit_start[0], edge_y), (exit_end[0], edge_y)]
            for edge_y in (near_y, room.height - near_y)
        ]
    else:
        near_x = 0 if center_x < room.width / 2 else room.width
        corridors = [
            [(edge_x, exit_start[1]), (edge_x, exit_end[1])]
            for edge_x in (near_x, room.width - near_x)
        ]

    candidates = [
        enforce_orthogonal([dock_start, exit_start] + corridor + [exit_end, dock_end])
        for corridor in corridors
    ]

    for points in candidates:
        if find_collision(points, rects, from_rect.id, to_rect_id) is None:
            return points

    return candidates[0]


def loop_at_dock(dock: Point, side, room: Room, distance: float = 10) -> List[Point]:
    """
    Route a dock back to itself without repeating a vertex.

    Goes out along the exit direction and back. When the room wall stops
    that stub, the loop runs along the wall instead (clockwise first).

    Raises:
        ValueError: If the room has no extent to loop in
    """
    dock = clamp_to_room(dock[0], dock[1], room)
    distance = distance or 1
    dx, dy = DockSide(side).exit_direction

    for step_x, step_y in ((dx, dy), (-dy, dx), (dy, -dx)):
        turn = clamp_to_room(dock[0] + step_x * distance, dock[1] + step_y * distance, room)
        if turn != dock:
            return [dock, turn, dock]

    raise ValueError(f"Room {room.width}x{room.height} leaves no space to loop at {dock}")


def route_points(
    from_dock: DockPoint,
    to_dock: DockPoint,
    rects: Sequence[Rectangle],
    room: Room,
    config: Optional[RouterConfig] = None
) -> List[Point]:
    """
    Route between two dock points and return the polyline as points.

    Returns:
        List of (x, y) points; empty if either rectangle is missing
    """
    config = config or DEFAULT_CONFIG

    from_rect = find_rectangle(rects, from_dock.rect_id)
    to_rect = find_rectangle(rects, to_dock.rect_id)

    if from_rect is None or to_rect is None:
        logger.warning(
            f"Cannot route {from_dock.rect_id}:{from_dock.side.value} -> "
            f"{to_dock.rect_id}:{to_dock.side.value}: rectangle not found"
        )
        return []

    dock_start = get_dock_point(from_rect, from_dock.side)
    dock_end = get_dock_point(to_rect, to_dock.side)

    if dock_start == dock_end:
        return loop_at_dock(dock_start, from_dock.side, room, config.fallback_margin)

    route = None
    for attempt in config.attempts:
        route = try_route(from_dock, to_dock, dock_start, dock_end, rects, room, attempt, config)
        if route is not None:
            logger.debug(f"Routed {from_dock.rect_id} -> {to_dock.rect_id} at cell size {attempt.cell_size}")
            break

    if route is None:
        logger.info(
            f"All grid attempts failed for {from_dock.rect_id} -> {to_dock.rect_id}, using edge fallback"
        )
        route = build_fallback_route(
            dock_start, from_dock.side, from_rect,
            dock_end, to_dock.side, room,
            margin=config.fallback_margin,
            rects=rects,
            to_rect_id=to_rect.id,
        )

    route = finalize_path(route, room)
    if len(route) < 2:
        # Both docks clamped onto the same point
        route = loop_at_dock(route[0], from_dock.side, room, config.fallback_margin)
    return route


def route_path(
    from_dock: DockPoint,
    to_dock: DockPoint,
    rects: Sequence[Rectangle],
    room: Room,
    config: Optional[RouterConfig] = None
) -> List[float]:
    """
    Route an orthogonal path between two dock points.

    Never raises for layout problems: a missing rectangle yields an empty
    list, and exhausted grid search falls back to an edge route.

    Args:
        from_dock: Start dock (rectangle id and side)
        to_dock: End dock (rectangle id and side)
        rects: All rectangles of the layout
        room: Room bounds
        config: Router configuration (defaults apply when None)

    Returns:
        Flat coordinate list [x0, y0, x1, y1, ...]
    """
    return flatten_points(route_points(from_dock, to_dock, rects, room, config))
