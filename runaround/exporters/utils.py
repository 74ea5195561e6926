"""
Path checks shared by project files and path table exports
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .exceptions import PathValidationError

logger = logging.getLogger(__name__)

MAX_FILENAME_LENGTH = 255
PROJECT_SUFFIXES = ('.json',)

# Device names Windows refuses as file stems
RESERVED_NAMES = frozenset(
    ['CON', 'PRN', 'AUX', 'NUL']
    + [f'COM{i}' for i in range(1, 10)]
    + [f'LPT{i}' for i in range(1, 10)]
)


def validate_file_path(
    file_path: Union[str, Path],
    must_exist: bool = False,
    suffixes: Optional[Iterable[str]] = None
) -> Path:
    """
    Resolve a project or export path and reject unusable ones

    Args:
        file_path: Path to validate
        must_exist: Whether the parent directory must already exist (writes)
        suffixes: Accepted file suffixes, case-insensitive; any suffix when None

    Returns:
        Resolved Path object

    Raises:
        PathValidationError: If the path is empty, too long, reserved, has an
            unexpected suffix, or its parent directory is missing

    Examples:
        >>> validate_file_path("layout.json", suffixes=PROJECT_SUFFIXES)  # doctest: +SKIP
        PosixPath('/home/user/layout.json')
    """
    if not file_path or not isinstance(file_path, (str, Path)):
        raise PathValidationError(f"File path must be a non-empty string or Path, got: {type(file_path)}")

    name = Path(file_path).name
    if len(name) > MAX_FILENAME_LENGTH:
        raise PathValidationError(f"Filename too long ({len(name)} chars). Maximum is {MAX_FILENAME_LENGTH}")

    try:
        path = Path(file_path).expanduser().resolve()
    except (ValueError, OSError) as e:
        raise PathValidationError(f"Invalid file path: {e}") from e

    if path.stem.upper() in RESERVED_NAMES:
        raise PathValidationError(f"Reserved filename: {name}")

    if suffixes is not None:
        allowed = sorted({suffix.lower() for suffix in suffixes})
        if path.suffix.lower() not in allowed:
            raise PathValidationError(f"Expected a {' or '.join(allowed)} file, got: {name}")

    if must_exist and not path.parent.is_dir():
        raise PathValidationError(f"Parent directory does not exist: {path.parent}")

    logger.debug(f"Validated path {path}")
    return path
