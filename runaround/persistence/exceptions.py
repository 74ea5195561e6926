"""
Custom exceptions for the persistence module
"""


class PersistenceError(Exception):
    """Base exception for all persistence errors"""
    pass


class ProjectValidationError(PersistenceError):
    """Raised when project data does not match the schema"""
    pass


class ProjectFileError(PersistenceError):
    """Raised when reading or writing a project file fails"""
    pass
