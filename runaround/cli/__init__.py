"""
CLI utilities for the runaround command
"""

from .argument_parser import setup_argument_parser
from .output import print_route_summary, print_lane_offsets, print_separator
from .init_command import run_init_command
from .config_discovery import discover_config

__all__ = [
    'setup_argument_parser',
    'print_route_summary',
    'print_lane_offsets',
    'print_separator',
    'run_init_command',
    'discover_config'
]
