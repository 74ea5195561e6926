"""
Config file discovery logic
"""

import logging
from pathlib import Path
from typing import List, Optional

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = 'runaround'
LOCAL_CONFIG_NAME = 'runaround.yaml'
USER_CONFIG_NAME = 'config.yaml'


def config_candidates() -> List[Path]:
    """
    Locations searched when no config path is given, highest priority first

    1. ./runaround.yaml in the working directory
    2. runaround/config.yaml in the OS-native user config directory
       (~/.config/runaround/config.yaml on Linux)
    """
    return [
        Path(LOCAL_CONFIG_NAME).resolve(),
        Path(user_config_dir(APP_NAME, appauthor=False)) / USER_CONFIG_NAME,
    ]


def discover_config(explicit_path: str = None) -> Optional[str]:
    """
    Resolve the router configuration file to load

    Args:
        explicit_path: Path given on the command line, if any

    Returns:
        Absolute path to the config file, or None when nothing was given or
        found (built-in defaults apply)

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if explicit_path:
        path = Path(explicit_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {explicit_path}")
        return str(path)

    for candidate in config_candidates():
        if candidate.exists():
            logger.debug(f"Discovered config at {candidate}")
            return str(candidate)

    return None
