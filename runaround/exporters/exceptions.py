"""
Exceptions raised while writing the path table or checking file paths
"""


class ExporterError(Exception):
    """Base exception for path table exports"""
    pass


class FileExportError(ExporterError):
    """Raised when the path table cannot be written to disk"""
    pass


class PathValidationError(ExporterError):
    """Raised when a project or export path is unusable"""
    pass
