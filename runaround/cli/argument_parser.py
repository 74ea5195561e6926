"""
Command-line argument parser configuration with subcommands
"""

import argparse

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
EXPORT_FORMATS = ['csv', 'json', 'parquet']


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by the commands that read a project file"""
    parser.add_argument(
        'project_file',
        help='Path to the JSON project file'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to YAML router configuration (optional, will auto-discover)'
    )

    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default='INFO',
        help='Set logging level (default: INFO). Use DEBUG to see every routing attempt.'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write the full DEBUG log to this file'
    )


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser with subcommands (init, route, offsets)

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='runaround',
        description='Orthogonal path router for room layouts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Initialize configuration
  runaround init                              # Create ./runaround.yaml
  runaround init --force                      # Overwrite existing config
  runaround init --path ./configs/dense.yaml  # Create in custom location

  # Route paths
  runaround route layout.json                 # Recompute paths and save in place
  runaround route layout.json -o routed.json  # Save to another file
  runaround route layout.json --export paths.csv
  runaround route layout.json --log-level DEBUG

  # Inspect lane offsets
  runaround offsets layout.json --spacing 8
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        help='Command to execute'
    )

    # ========================================================================
    # INIT SUBCOMMAND
    # ========================================================================
    init_parser = subparsers.add_parser(
        'init',
        help='Create a new configuration file',
        description='Initialize runaround by creating a router configuration file'
    )

    init_parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing configuration file'
    )

    init_parser.add_argument(
        '--path', '-p',
        type=str,
        help='Custom path for config file (default: ./runaround.yaml)'
    )

    # ========================================================================
    # ROUTE SUBCOMMAND
    # ========================================================================
    route_parser = subparsers.add_parser(
        'route',
        help='Recompute every automatic path of a project',
        description='Route all paths in draw order, skipping manually edited ones'
    )
    _add_common_arguments(route_parser)

    route_parser.add_argument(
        '--output', '-o',
        type=str,
        help='Write the routed project here instead of overwriting the input'
    )

    route_parser.add_argument(
        '--export', '-e',
        type=str,
        help='Also export the path table (format from the file suffix)'
    )

    route_parser.add_argument(
        '--format',
        choices=EXPORT_FORMATS,
        help='Path table format, overrides the --export suffix'
    )

    # ========================================================================
    # OFFSETS SUBCOMMAND
    # ========================================================================
    offsets_parser = subparsers.add_parser(
        'offsets',
        help='Print lane offsets of overlapping paths',
        description='Compute the display lane offset of every path segment'
    )
    _add_common_arguments(offsets_parser)

    offsets_parser.add_argument(
        '--spacing', '-s',
        type=float,
        help='Lane spacing in pixels (default: project setting, then config)'
    )

    return parser
