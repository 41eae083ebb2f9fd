"""
Movie API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError

from movie_catalog.api.dependencies import get_movie_repository
from movie_catalog.api.models.movie import (
    MessageResponse, MetadataResponse, MovieCreate, MovieEnvelope, MovieList,
    MovieResponse, MovieUpdate,
)
from movie_catalog.core.filters import Filters, validate_filters
from movie_catalog.core.movie import Movie, validate_movie
from movie_catalog.core.validator import Validator
from movie_catalog.database.repository import MovieRepository
from movie_catalog.exceptions import (
    EditConflictError, FailedValidationError, QueryTimeoutError, RecordNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/movies", tags=["movies"])

MOVIE_SORT_SAFELIST = ["id", "title", "year", "runtime", "-id", "-title", "-year", "-runtime"]

NOT_FOUND = "the requested resource could not be found"
EDIT_CONFLICT = "unable to update the record due to an edit conflict, please try again"
SERVER_ERROR = "the server encountered a problem and could not process your request"


def _server_error(e: Exception) -> HTTPException:
    logger.error("Request failed: %s", e, exc_info=e)
    return HTTPException(status_code=500, detail=SERVER_ERROR)


def _ensure_valid(v: Validator) -> None:
    """Reject the request before it reaches the repository (handled in main)."""
    if not v.valid():
        raise FailedValidationError(v.errors)


@router.post("", response_model=MovieEnvelope, status_code=201)
def create_movie(
    movie_in: MovieCreate,
    response: Response,
    repo: MovieRepository = Depends(get_movie_repository),
):
    """Create a movie."""
    movie = Movie(
        title=movie_in.title,
        year=movie_in.year,
        runtime=movie_in.runtime,
        genres=movie_in.genres,
    )
    v = Validator()
    validate_movie(v, movie)
    _ensure_valid(v)

    try:
        repo.insert(movie)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)

    response.headers["Location"] = f"/v1/movies/{movie.id}"
    return MovieEnvelope(movie=MovieResponse.model_validate(movie))


@router.get("", response_model=MovieList)
def list_movies(
    title: str = Query(""),
    genres: str = Query(""),
    page: int = Query(1),
    page_size: int = Query(20),
    sort: str = Query("id"),
    repo: MovieRepository = Depends(get_movie_repository),
):
    """List movies with title search, genre filter, sorting and pagination."""
    genre_list = [g for g in genres.split(",") if g] if genres else []
    filters = Filters(
        page=page,
        page_size=page_size,
        sort=sort,
        sort_safelist=MOVIE_SORT_SAFELIST,
    )
    v = Validator()
    validate_filters(v, filters)
    _ensure_valid(v)

    try:
        movies, metadata = repo.get_all(title, genre_list, filters)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)

    return MovieList(
        movies=[MovieResponse.model_validate(m) for m in movies],
        metadata=MetadataResponse.model_validate(metadata),
    )


@router.get("/{movie_id}", response_model=MovieEnvelope)
def get_movie(movie_id: int, repo: MovieRepository = Depends(get_movie_repository)):
    """Get movie details by ID."""
    try:
        movie = repo.get(movie_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)
    return MovieEnvelope(movie=MovieResponse.model_validate(movie))


@router.patch("/{movie_id}", response_model=MovieEnvelope)
def update_movie(
    movie_id: int,
    movie_in: MovieUpdate,
    repo: MovieRepository = Depends(get_movie_repository),
):
    """Partially update a movie, guarded by the version it was read at."""
    try:
        movie = repo.get(movie_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)

    if movie_in.title is not None:
        movie.title = movie_in.title
    if movie_in.year is not None:
        movie.year = movie_in.year
    if movie_in.runtime is not None:
        movie.runtime = movie_in.runtime
    if movie_in.genres is not None:
        movie.genres = movie_in.genres

    v = Validator()
    validate_movie(v, movie)
    _ensure_valid(v)

    try:
        repo.update(movie)
    except EditConflictError:
        raise HTTPException(status_code=409, detail=EDIT_CONFLICT)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)

    return MovieEnvelope(movie=MovieResponse.model_validate(movie))


@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(movie_id: int, repo: MovieRepository = Depends(get_movie_repository)):
    """Delete a movie by ID."""
    try:
        repo.delete(movie_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except (QueryTimeoutError, SQLAlchemyError) as e:
        raise _server_error(e)
    return MessageResponse(message="movie successfully deleted")
