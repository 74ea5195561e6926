"""
Command-line entry point
Usage: runaround {init,route,offsets} ...
"""

import sys
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..core.config import RouterConfig
from ..core.runner import apply_recomputed, recompute_paths
from ..exporters import ExporterError, export_paths
from ..persistence import PersistenceError, load_project, save_project
from ..routing.lane_manager import compute_all_lane_offsets
from .argument_parser import setup_argument_parser
from .config_discovery import discover_config
from .init_command import run_init_command
from .output import print_lane_offsets, print_route_summary

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = 'INFO', log_file: Optional[Path] = None) -> None:
    """
    Configure logging to output to console and, optionally, a file

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file receiving every DEBUG record
    """
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def load_config(explicit_path: Optional[str]) -> RouterConfig:
    """
    Resolve and load the router configuration

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the configuration is invalid
    """
    config_path = discover_config(explicit_path)
    if config_path is None:
        logger.info("No config file found, using built-in defaults")
        return RouterConfig.default()

    print(f"📋 Loading config from: {config_path}")
    return RouterConfig.from_yaml(config_path)


def run_route_command(args) -> int:
    """
    Recompute all automatic paths of a project and save it

    Returns:
        Exit code (0 = success, 1 = error)
    """
    start_time = datetime.now()

    config = load_config(args.config)
    project = load_project(args.project_file)

    results = recompute_paths(project, config)
    routed = apply_recomputed(project, results)

    output_path = save_project(routed, args.output or args.project_file)
    print(f"💾 Project saved to: {output_path}")

    if args.export:
        table_path = export_paths(routed, args.export, fmt=args.format)
        print(f"📄 Path table saved to: {table_path}")

    print_route_summary(routed, results)

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"Routing completed in {duration:.2f} seconds")
    return 0


def run_offsets_command(args) -> int:
    """
    Print the lane offsets of a project's stored paths

    Returns:
        Exit code (0 = success, 1 = error)
    """
    config = load_config(args.config)
    project = load_project(args.project_file)

    spacing = args.spacing or project.overlap_spacing or config.overlap_spacing
    offsets = compute_all_lane_offsets(
        project.points_by_id(),
        project.path_order,
        spacing=spacing,
        epsilon=config.overlap_epsilon,
    )
    print_lane_offsets(offsets)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the runaround CLI"""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command == 'init':
        return run_init_command(force=args.force, path=args.path)

    setup_logging(args.log_level, Path(args.log_file) if args.log_file else None)

    commands = {
        'route': run_route_command,
        'offsets': run_offsets_command,
    }

    try:
        return commands[args.command](args)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1
    except (PersistenceError, ExporterError) as e:
        logger.error(str(e))
        print(f"❌ {e}")
        return 1
