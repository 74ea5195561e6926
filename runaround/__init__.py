"""
runaround - Orthogonal path routing for room layouts
Obstacle-avoiding A* routes between rectangle dock points, with lane offsets for overlapping paths
"""

from importlib.metadata import version, PackageNotFoundError

from .core.config import RouterConfig
from .core.models import DockPoint, DockSide, Rectangle, Room
from .routing import route_path, compute_lane_offsets, compute_all_lane_offsets

try:
    __version__ = version("runaround")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    "RouterConfig",
    "DockPoint",
    "DockSide",
    "Rectangle",
    "Room",
    "route_path",
    "compute_lane_offsets",
    "compute_all_lane_offsets",
]
