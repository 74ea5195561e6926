"""
Read and write project files (JSON)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..exporters.exceptions import PathValidationError
from ..exporters.utils import PROJECT_SUFFIXES, validate_file_path
from .exceptions import ProjectFileError, ProjectValidationError
from .schema import ProjectData

logger = logging.getLogger(__name__)


def project_from_dict(data: Dict[str, Any]) -> ProjectData:
    """
    Validate a parsed project dictionary

    Raises:
        ProjectValidationError: If the data does not match the schema,
            including stored points that are not orthogonal
    """
    try:
        return ProjectData.model_validate(data)
    except ValidationError as e:
        logger.error(f"Project validation failed: {e}")
        raise ProjectValidationError(f"Invalid project data: {e}") from e


def project_to_dict(project: ProjectData) -> Dict[str, Any]:
    """Serialize a project with the camelCase keys of the file format"""
    return project.model_dump(mode='json', by_alias=True)


def project_from_json(text: str) -> ProjectData:
    """
    Parse and validate project JSON

    Raises:
        ProjectValidationError: If the text is not valid JSON or fails validation
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Project JSON could not be parsed: {e}")
        raise ProjectValidationError(f"Invalid JSON: {e}") from e

    return project_from_dict(data)


def project_to_json(project: ProjectData, indent: int = 2) -> str:
    """Serialize a project to JSON"""
    return json.dumps(project_to_dict(project), indent=indent, ensure_ascii=False)


def load_project(file_path: Union[str, Path]) -> ProjectData:
    """
    Load a project file

    Args:
        file_path: Path to the JSON project file

    Returns:
        Validated ProjectData

    Raises:
        PathValidationError: If the path is invalid
        ProjectFileError: If the file cannot be read
        ProjectValidationError: If the content is invalid
    """
    path = validate_file_path(file_path, suffixes=PROJECT_SUFFIXES)

    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, IOError) as e:
        logger.error(f"Failed to read project file: {e}")
        raise ProjectFileError(f"Failed to read file '{file_path}': {e}") from e

    project = project_from_json(text)
    logger.info(f"Loaded project from {path}: {len(project.rects)} rectangles, {len(project.paths)} paths")
    return project


def save_project(project: ProjectData, file_path: Union[str, Path], indent: int = 2) -> Path:
    """
    Write a project file

    Args:
        project: Project to save
        file_path: Destination path
        indent: JSON indentation

    Returns:
        Resolved path that was written

    Raises:
        PathValidationError: If the path is invalid
        ProjectFileError: If the write fails
    """
    json_str = project_to_json(project, indent=indent)

    try:
        validated_path = validate_file_path(file_path, must_exist=True, suffixes=PROJECT_SUFFIXES)
        validated_path.write_text(json_str, encoding='utf-8')
    except PathValidationError:
        raise
    except (OSError, IOError) as e:
        logger.error(f"Failed to write project file: {e}")
        raise ProjectFileError(f"Failed to write file '{file_path}': {e}") from e

    logger.info(f"Project saved to: {validated_path}")
    return validated_path
