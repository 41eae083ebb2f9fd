"""
Movie domain value and its business rules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from movie_catalog.core.validator import Validator, unique

MIN_YEAR = 1888
MAX_TITLE_BYTES = 500
MAX_GENRES = 5


@dataclass
class Movie:
    """
    A movie as seen by the repository and the API.

    Zero values (0, "", None) mean "not provided". ``id``, ``created_at`` and
    ``version`` are assigned by the store.
    """

    id: int = 0
    created_at: Optional[datetime] = None
    title: str = ""
    year: int = 0
    runtime: int = 0
    genres: Optional[List[str]] = None
    version: int = 0


def validate_movie(v: Validator, movie: Movie) -> None:
    """
    Check a candidate movie against the catalog rules.

    Every rule is evaluated; failures are recorded on ``v``.

    Args:
        v: Validator collecting field errors
        movie: Candidate movie
    """
    v.check(movie.title != "", "title", "must be provided")
    v.check(len(movie.title.encode("utf-8")) <= MAX_TITLE_BYTES, "title", "must not be more than 500 bytes long")

    v.check(movie.year != 0, "year", "must be provided")
    v.check(movie.year >= MIN_YEAR, "year", "must be greater than 1888")
    v.check(movie.year <= datetime.now().year, "year", "must not be in the future")

    v.check(movie.runtime != 0, "runtime", "must be provided")
    v.check(movie.runtime > 0, "runtime", "must be a positive integer")

    genres = movie.genres
    v.check(genres is not None, "genres", "must be provided")
    v.check(len(genres or []) >= 1, "genres", "must contain at least 1 genre")
    v.check(len(genres or []) <= MAX_GENRES, "genres", "must not contain more than 5 genres")
    v.check(unique(genres or []), "genres", "must not contain duplicate values")
