"""
A* pathfinding over the obstacle grid.

Cost model:
- Each step costs BASE_COST
- Changing direction adds TURN_PENALTY (prefer straight lines)
- Heuristic is plain Manhattan distance; turn cost is left out of it,
  so results favour few bends without being strictly cost-optimal
"""

from typing import Container, Dict, List, Optional, Tuple
import heapq
import itertools
import logging
from dataclasses import dataclass, field

from .grid import GridCell

logger = logging.getLogger(__name__)

BASE_COST = 1
TURN_PENALTY = 3
SEARCH_MARGIN = 5
ITERATION_FACTOR = 4

# Up, Right, Down, Left
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


@dataclass(order=True)
class Node:
    """Node in A* search."""
    f_cost: float = field(compare=True)  # f = g + h
    order: int = field(compare=True)  # insertion counter, breaks ties FIFO
    g_cost: float = field(compare=False)
    cell: GridCell = field(compare=False)
    parent: Optional['Node'] = field(default=None, compare=False)
    direction: Optional[Tuple[int, int]] = field(default=None, compare=False)


def manhattan_distance(cell1: GridCell, cell2: GridCell) -> int:
    """Calculate Manhattan distance between two cells."""
    return abs(cell1.x - cell2.x) + abs(cell1.y - cell2.y)


def step_cost(
    direction: Optional[Tuple[int, int]],
    next_direction: Tuple[int, int],
    base_cost: float = BASE_COST,
    turn_penalty: float = TURN_PENALTY
) -> float:
    """Cost of one move; the first move from the start is never a turn."""
    if direction is not None and direction != next_direction:
        return base_cost + turn_penalty
    return base_cost


def reconstruct_path(node: Node) -> List[GridCell]:
    """Reconstruct path from goal node by following parent pointers."""
    path = []
    current = node

    while current is not None:
        path.append(current.cell)
        current = current.parent

    path.reverse()
    return path


def astar(
    start: GridCell,
    end: GridCell,
    blocked: Container,
    grid_width: int,
    grid_height: int,
    base_cost: float = BASE_COST,
    turn_penalty: float = TURN_PENALTY,
    search_margin: int = SEARCH_MARGIN,
    iteration_factor: int = ITERATION_FACTOR
) -> Optional[List[GridCell]]:
    """
    Find a low-cost orthogonal path from start to end.

    The start cell itself is never checked against ``blocked``; callers
    free the start and goal cells they need.

    Args:
        start: Starting grid cell
        end: Goal grid cell
        blocked: Anything supporting ``cell in blocked`` (ObstacleGrid or a set of GridCell)
        grid_width: Room width in cells
        grid_height: Room height in cells
        base_cost: Cost of a single step
        turn_penalty: Extra cost for a change of direction
        search_margin: Cells the search may explore beyond the room grid
        iteration_factor: Iteration cap multiplier (cap = factor * width * height)

    Returns:
        List of grid cells from start to end, or None if no path was found
    """
    min_x, max_x = -search_margin, grid_width + search_margin
    min_y, max_y = -search_margin, grid_height + search_margin
    max_iterations = iteration_factor * grid_width * grid_height

    counter = itertools.count()
    h_start = manhattan_distance(start, end)
    open_set = [Node(f_cost=h_start, order=next(counter), g_cost=0, cell=start)]

    closed_set = set()
    best_g_cost: Dict[GridCell, float] = {start: 0}

    iterations = 0
    while open_set and iterations < max_iterations:
        current = heapq.heappop(open_set)

        # Stale entry superseded by a cheaper one, not counted against the cap
        if current.cell in closed_set or current.g_cost > best_g_cost.get(current.cell, current.g_cost):
            continue

        iterations += 1

        if current.cell == end:
            logger.debug(f"A* reached {end} after {iterations} iterations")
            return reconstruct_path(current)

        closed_set.add(current.cell)

        for dx, dy in DIRECTIONS:
            nx = current.cell.x + dx
            ny = current.cell.y + dy

            if nx < min_x or nx > max_x or ny < min_y or ny > max_y:
                continue

            neighbor = GridCell(nx, ny)
            if neighbor in closed_set or neighbor in blocked:
                continue

            g_cost = current.g_cost + step_cost(current.direction, (dx, dy), base_cost, turn_penalty)

            # Skip if we already know an equal or better way there
            if neighbor in best_g_cost and g_cost >= best_g_cost[neighbor]:
                continue

            best_g_cost[neighbor] = g_cost
            heapq.heappush(open_set, Node(
                f_cost=g_cost + manhattan_distance(neighbor, end),
                order=next(counter),
                g_cost=g_cost,
                cell=neighbor,
                parent=current,
                direction=(dx, dy),
            ))

    logger.debug(f"A* found no path from {start} to {end} after {iterations} iterations")
    return None
