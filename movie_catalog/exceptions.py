"""
Domain exceptions for the movie catalog.

Store-level failures other than the ones translated here are SQLAlchemy
exceptions and propagate to the caller unchanged.
"""

from typing import Dict


class MovieCatalogError(Exception):
    """Base exception for the movie catalog."""


class RecordNotFoundError(MovieCatalogError):
    """Raised when a point operation matches no row."""

    def __init__(self, message: str = "record not found"):
        super().__init__(message)


class EditConflictError(MovieCatalogError):
    """Raised when an update presents a version that is no longer current."""

    def __init__(self, message: str = "edit conflict"):
        super().__init__(message)


class QueryTimeoutError(MovieCatalogError):
    """Raised when a store round trip exceeds its deadline."""


class FailedValidationError(MovieCatalogError):
    """
    Raised when caller-supplied data breaks business rules.

    Attributes:
        errors: Mapping of field name to the first failing rule's message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"validation failed: {self.errors}")


class InvalidRuntimeFormatError(MovieCatalogError, ValueError):
    """Raised when a runtime value is not a JSON string of digits."""

    def __init__(self, message: str = "invalid runtime format"):
        super().__init__(message)
