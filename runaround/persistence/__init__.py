"""
Project files: schema validation and JSON load/save
"""

from .schema import ProjectData, PathRowModel, RectModel, RoomModel, EndpointModel, PathFields
from .save_load import (
    load_project,
    save_project,
    project_from_json,
    project_to_json,
    project_from_dict,
    project_to_dict,
)
from .exceptions import PersistenceError, ProjectValidationError, ProjectFileError

__all__ = [
    "ProjectData",
    "PathRowModel",
    "RectModel",
    "RoomModel",
    "EndpointModel",
    "PathFields",
    "load_project",
    "save_project",
    "project_from_json",
    "project_to_json",
    "project_from_dict",
    "project_to_dict",
    "PersistenceError",
    "ProjectValidationError",
    "ProjectFileError",
]
