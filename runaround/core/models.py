"""
Layout snapshot types consumed by the router
"""

from typing import Tuple
from dataclasses import dataclass
from enum import Enum


class DockSide(str, Enum):
    """Side of a rectangle a path attaches to."""
    TOP = 'top'
    RIGHT = 'right'
    BOTTOM = 'bottom'
    LEFT = 'left'

    @property
    def exit_direction(self) -> Tuple[int, int]:
        """Outward unit vector (dx, dy) for this side."""
        return _EXIT_DIRECTIONS[self]

    @property
    def is_horizontal_exit(self) -> bool:
        """True when paths leave this side along the x axis."""
        return self in (DockSide.LEFT, DockSide.RIGHT)


_EXIT_DIRECTIONS = {
    DockSide.TOP: (0, -1),
    DockSide.RIGHT: (1, 0),
    DockSide.BOTTOM: (0, 1),
    DockSide.LEFT: (-1, 0),
}


@dataclass(frozen=True)
class Room:
    """Bounding area every route must stay inside."""
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside the room (edges included)."""
        return 0 <= x <= self.width and 0 <= y <= self.height


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned obstacle in the layout."""
    id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class DockPoint:
    """Attachment of a path endpoint to one side of a rectangle."""
    rect_id: str
    side: DockSide

    def __post_init__(self):
        # Accept plain strings ('top', 'left', ...) for convenience
        if not isinstance(self.side, DockSide):
            object.__setattr__(self, 'side', DockSide(self.side))
