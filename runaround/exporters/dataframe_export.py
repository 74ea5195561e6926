"""
Export the path table to a Polars DataFrame and to files
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import polars as pl

from ..core.geometry import manhattan_length
from ..persistence.schema import ProjectData
from .exceptions import ExporterError, FileExportError, PathValidationError
from .utils import validate_file_path

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('csv', 'json', 'parquet')

TABLE_SCHEMA = {
    'number': pl.Int64,
    'path_id': pl.Utf8,
    'from_rect': pl.Utf8,
    'from_side': pl.Utf8,
    'to_rect': pl.Utf8,
    'to_side': pl.Utf8,
    'description': pl.Utf8,
    'knackpunkt': pl.Utf8,
    'begruendung': pl.Utf8,
    'kommentar': pl.Utf8,
    'distance_px': pl.Int64,
    'manually_edited': pl.Boolean,
}


def export_paths_to_dataframe(project: ProjectData) -> pl.DataFrame:
    """
    Build the path table as a Polars DataFrame

    One row per path in draw order, numbered from 1, with the free-text
    columns and the Manhattan length of the stored route.

    Args:
        project: Project to export

    Returns:
        Polars DataFrame following TABLE_SCHEMA (empty with that schema if
        the project has no ordered paths)
    """
    rows: List[Dict[str, Any]] = []

    for number, path in enumerate(project.ordered_paths(), start=1):
        rows.append({
            'number': number,
            'path_id': path.id,
            'from_rect': path.from_.rect_id,
            'from_side': path.from_.side.value,
            'to_rect': path.to.rect_id,
            'to_side': path.to.side.value,
            'description': path.row_fields.description,
            'knackpunkt': path.row_fields.knackpunkt,
            'begruendung': path.row_fields.begruendung,
            'kommentar': path.row_fields.kommentar,
            'distance_px': manhattan_length(path.points),
            'manually_edited': path.is_manually_edited,
        })

    try:
        if not rows:
            logger.info("No paths to export, returning empty DataFrame")
            return pl.DataFrame(schema=TABLE_SCHEMA)

        df = pl.DataFrame(rows, schema=TABLE_SCHEMA)
        logger.info(f"Created DataFrame with {len(df)} path rows")
        return df

    except Exception as e:
        logger.error(f"Failed to create Polars DataFrame: {e}")
        raise ExporterError(f"Failed to create DataFrame: {e}") from e


def export_paths(project: ProjectData, file_path: Union[str, Path], fmt: str = None) -> Path:
    """
    Write the path table to a file

    Args:
        project: Project to export
        file_path: Destination path
        fmt: 'csv', 'json' or 'parquet'; inferred from the file suffix when None

    Returns:
        Resolved path that was written

    Raises:
        ExporterError: If the format is not supported
        PathValidationError: If the path is invalid
        FileExportError: If the write fails
    """
    fmt = (fmt or Path(str(file_path)).suffix.lstrip('.') or 'csv').lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ExporterError(f"Unsupported export format '{fmt}', expected one of {', '.join(SUPPORTED_FORMATS)}")

    df = export_paths_to_dataframe(project)

    try:
        validated_path = validate_file_path(file_path, must_exist=True)

        if fmt == 'csv':
            df.write_csv(validated_path)
        elif fmt == 'json':
            df.write_json(validated_path)
        else:
            df.write_parquet(validated_path)

    except PathValidationError:
        raise
    except (OSError, IOError) as e:
        logger.error(f"Failed to write {fmt} file: {e}")
        raise FileExportError(f"Failed to write file '{file_path}': {e}") from e

    logger.info(f"Path table exported to: {validated_path}")
    return validated_path
