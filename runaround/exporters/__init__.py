"""
Path table export

The table lists every path in draw order with its endpoints, free-text
columns and routed length. It is built as a Polars DataFrame and can be
written as CSV, JSON or Parquet.
"""

from .dataframe_export import export_paths_to_dataframe, export_paths

from .exceptions import (
    ExporterError,
    FileExportError,
    PathValidationError
)

__all__ = [
    "export_paths_to_dataframe",
    "export_paths",
    "ExporterError",
    "FileExportError",
    "PathValidationError",
]
