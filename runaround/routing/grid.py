"""
Obstacle grid for A* pathfinding.

Rasterizes the room and its rectangles into a dense blocked/free cell
set covering the room grid plus an exploration margin on every side.
"""

import math
import logging
from typing import Sequence, Tuple
from dataclasses import dataclass

from ..core.models import Rectangle, Room

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 10
EXTRA_CELLS = 10


@dataclass(frozen=True)
class GridCell:
    """Represents a cell in the routing grid."""
    x: int
    y: int


def world_to_grid(x: float, y: float, cell_size: float) -> GridCell:
    """Convert world coordinates to the nearest grid cell (halves round up)."""
    return GridCell(math.floor(x / cell_size + 0.5), math.floor(y / cell_size + 0.5))


def grid_to_world(cell: GridCell, cell_size: float) -> Tuple[float, float]:
    """Convert a grid cell to world coordinates (cell origin)."""
    return (cell.x * cell_size, cell.y * cell_size)


def grid_dimensions(room: Room, cell_size: float) -> Tuple[int, int]:
    """Number of cells needed to cover the room horizontally and vertically."""
    return (math.ceil(room.width / cell_size), math.ceil(room.height / cell_size))


class ObstacleGrid:
    """
    Dense blocked-cell set.

    Cells are stored in a flat bytearray indexed by
    ``(gy + extra) * cols + (gx + extra)``. Cells outside the stored extent
    are reported as blocked.
    """

    def __init__(self, grid_width: int, grid_height: int, extra: int = EXTRA_CELLS):
        """
        Initialize an all-free grid.

        Args:
            grid_width: Room width in cells
            grid_height: Room height in cells
            extra: Cells stored beyond the room grid on every side
        """
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.extra = extra

        # Cells -extra..grid_width+extra inclusive
        self.cols = grid_width + 2 * extra + 1
        self.rows = grid_height + 2 * extra + 1

        self._cells = bytearray(self.cols * self.rows)

    @property
    def min_x(self) -> int:
        return -self.extra

    @property
    def max_x(self) -> int:
        return self.grid_width + self.extra

    @property
    def min_y(self) -> int:
        return -self.extra

    @property
    def max_y(self) -> int:
        return self.grid_height + self.extra

    def in_extent(self, gx: int, gy: int) -> bool:
        """Check if a cell is inside the stored extent."""
        return self.min_x <= gx <= self.max_x and self.min_y <= gy <= self.max_y

    def _index(self, gx: int, gy: int) -> int:
        return (gy + self.extra) * self.cols + (gx + self.extra)

    def is_blocked(self, gx: int, gy: int) -> bool:
        """Check if a cell is blocked."""
        if not self.in_extent(gx, gy):
            return True
        return self._cells[self._index(gx, gy)] == 1

    def block(self, gx: int, gy: int) -> None:
        """Mark a cell as blocked (ignored outside the extent)."""
        if self.in_extent(gx, gy):
            self._cells[self._index(gx, gy)] = 1

    def unblock(self, gx: int, gy: int) -> None:
        """Mark a cell as free (ignored outside the extent)."""
        if self.in_extent(gx, gy):
            self._cells[self._index(gx, gy)] = 0

    def block_range(self, x_from: int, x_to: int, y_from: int, y_to: int) -> None:
        """Block every cell in the inclusive rectangle of cells, clipped to the extent."""
        x_from = max(x_from, self.min_x)
        x_to = min(x_to, self.max_x)
        y_from = max(y_from, self.min_y)
        y_to = min(y_to, self.max_y)
        if x_from > x_to or y_from > y_to:
            return

        width = x_to - x_from + 1
        row = b'\x01' * width
        for gy in range(y_from, y_to + 1):
            start = self._index(x_from, gy)
            self._cells[start:start + width] = row

    def blocked_count(self) -> int:
        """Number of blocked cells inside the stored extent."""
        return self._cells.count(1)

    def __contains__(self, cell) -> bool:
        if isinstance(cell, GridCell):
            return self.is_blocked(cell.x, cell.y)
        gx, gy = cell
        return self.is_blocked(gx, gy)


def build_obstacle_grid(
    room: Room,
    rects: Sequence[Rectangle],
    margin: float,
    cell_size: float = DEFAULT_CELL_SIZE,
    extra_cells: int = EXTRA_CELLS
) -> ObstacleGrid:
    """
    Rasterize the room and its rectangles into an obstacle grid.

    A cell is blocked when its world position lies outside the room or
    inside any rectangle expanded by ``margin`` on every side.

    Args:
        room: Room bounds
        rects: Obstacles (every rectangle of the layout)
        margin: Clearance around each rectangle in pixels
        cell_size: Grid cell size in pixels
        extra_cells: Cells rasterized beyond the room grid on every side

    Returns:
        ObstacleGrid with blocked cells marked
    """
    grid_width, grid_height = grid_dimensions(room, cell_size)
    grid = ObstacleGrid(grid_width, grid_height, extra=extra_cells)

    # Cells whose world position is inside [0, width] x [0, height]
    inside_max_x = math.floor(room.width / cell_size)
    inside_max_y = math.floor(room.height / cell_size)

    # Everything outside the room: bands above, below, left and right
    grid.block_range(grid.min_x, grid.max_x, grid.min_y, -1)
    grid.block_range(grid.min_x, grid.max_x, inside_max_y + 1, grid.max_y)
    grid.block_range(grid.min_x, -1, 0, inside_max_y)
    grid.block_range(inside_max_x + 1, grid.max_x, 0, inside_max_y)

    for rect in rects:
        left = rect.x - margin
        right = rect.x2 + margin
        top = rect.y - margin
        bottom = rect.y2 + margin

        grid.block_range(
            math.ceil(left / cell_size), math.floor(right / cell_size),
            math.ceil(top / cell_size), math.floor(bottom / cell_size),
        )

    logger.debug(
        f"Obstacle grid {grid_width}x{grid_height} (cell {cell_size}, margin {margin}): "
        f"{grid.blocked_count()} blocked cells"
    )
    return grid
