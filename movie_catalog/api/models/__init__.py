"""
Pydantic schemas for API request/response validation.
"""

from movie_catalog.api.models.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieEnvelope,
    MetadataResponse,
    MovieList,
    MessageResponse,
)

__all__ = [
    "MovieCreate",
    "MovieUpdate",
    "MovieResponse",
    "MovieEnvelope",
    "MetadataResponse",
    "MovieList",
    "MessageResponse",
]
