"""
Pydantic schemas for Movie API.

Runtimes travel as JSON strings of digits; see movie_catalog.core.runtime.
"""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, StrictInt, field_serializer, model_serializer

from movie_catalog.core.runtime import runtime_from_wire, runtime_to_wire

WireRuntime = Annotated[int, BeforeValidator(runtime_from_wire)]


class MovieCreate(BaseModel):
    """Request body for creating a movie. Business rules are checked separately."""

    title: str = ""
    year: StrictInt = 0
    runtime: WireRuntime = 0
    genres: list[str] | None = None

    class Config:
        extra = "forbid"


class MovieUpdate(BaseModel):
    """Request body for a partial update (omitted fields keep their value)."""

    title: str | None = None
    year: StrictInt | None = None
    runtime: WireRuntime | None = None
    genres: list[str] | None = None

    class Config:
        extra = "forbid"


class MovieResponse(BaseModel):
    """Response model for a single movie; created_at is never exposed."""

    id: int
    title: str
    year: int = 0
    runtime: int = 0
    genres: list[str] | None = None
    version: int

    class Config:
        from_attributes = True

    @field_serializer("runtime")
    def _serialize_runtime(self, runtime: int) -> str:
        return runtime_to_wire(runtime)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        for key in ("year", "runtime", "genres"):
            if not getattr(self, key):
                data.pop(key, None)
        return data


class MovieEnvelope(BaseModel):
    """Response wrapper for a single movie."""

    movie: MovieResponse


class MetadataResponse(BaseModel):
    """Pagination metadata; all zero when nothing matched."""

    current_page: int
    page_size: int
    last_page: int
    total_records: int

    class Config:
        from_attributes = True


class MovieList(BaseModel):
    """Response model for a page of movies with pagination metadata."""

    movies: list[MovieResponse]
    metadata: MetadataResponse


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
