"""
Movie repository: every SQL statement issued against the movies table.

Each operation is a single round trip bounded by a deadline. Updates are
guarded by the row version, so concurrent writers are arbitrated by the
store without client-side locking.
"""

import math
import time
from contextlib import contextmanager
from typing import Generator, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from movie_catalog.core.filters import Filters, Metadata, calculate_metadata
from movie_catalog.core.movie import Movie
from movie_catalog.database.connection import clear_deadline
from movie_catalog.database.models import MovieRow
from movie_catalog.exceptions import EditConflictError, QueryTimeoutError, RecordNotFoundError
from movie_catalog.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_QUERY_TIMEOUT = 3.0

# SQLite VM instructions between deadline checks
_PROGRESS_OPCODES = 1000


def _to_movie(row: MovieRow) -> Movie:
    return Movie(
        id=row.id,
        created_at=row.created_at,
        title=row.title,
        year=row.year,
        runtime=row.runtime,
        genres=list(row.genres) if row.genres is not None else None,
        version=row.version,
    )


class MovieRepository:
    """
    Data access for movies.

    Attributes:
        session: SQLAlchemy session bound to a SQLite engine
        timeout: Deadline in seconds applied to each round trip
    """

    def __init__(self, session: Session, timeout: float = DEFAULT_QUERY_TIMEOUT):
        self.session = session
        self.timeout = timeout

    @contextmanager
    def _deadline(self, operation: str) -> Generator[None, None, None]:
        """
        Bound the enclosed statements by ``self.timeout``.

        SQLite calls the progress handler while a statement runs; returning
        non-zero interrupts it. Lock waits are capped by the busy timeout,
        which SQLite applies without calling the progress handler. Any store
        failure rolls the session back.
        """
        dbapi_conn = self.session.connection().connection.driver_connection
        expires = time.monotonic() + self.timeout
        expired = False

        def _check_deadline() -> int:
            nonlocal expired
            if time.monotonic() >= expires:
                expired = True
                return 1
            return 0

        dbapi_conn.execute(f"PRAGMA busy_timeout = {math.ceil(self.timeout * 1000)}")
        dbapi_conn.set_progress_handler(_check_deadline, _PROGRESS_OPCODES)
        try:
            yield
        except SQLAlchemyError as e:
            # The rollback itself must not be interrupted
            dbapi_conn.set_progress_handler(None, 0)
            self.session.rollback()
            if isinstance(e, OperationalError) and (expired or time.monotonic() >= expires):
                logger.warning("%s exceeded %.2fs deadline", operation, self.timeout)
                raise QueryTimeoutError(f"{operation} timed out after {self.timeout}s") from e
            raise
        finally:
            # Once committed or rolled back the connection is back in the
            # pool and was reset on checkin; it may already be someone else's
            if self._holds(dbapi_conn):
                clear_deadline(dbapi_conn)

    def _holds(self, dbapi_conn) -> bool:
        if not self.session.in_transaction():
            return False
        return self.session.connection().connection.driver_connection is dbapi_conn

    def insert(self, movie: Movie) -> Movie:
        """
        Insert a validated movie.

        The store-assigned id, created_at and version are written back into
        ``movie``. Constraint violations propagate as IntegrityError.

        Returns:
            The same movie object
        """
        row = MovieRow(
            title=movie.title,
            year=movie.year,
            runtime=movie.runtime,
            genres=list(movie.genres or []),
        )
        with self._deadline("insert movie"):
            self.session.add(row)
            self.session.flush()
            self.session.refresh(row)
            movie.id = row.id
            movie.created_at = row.created_at
            movie.version = row.version
            self.session.commit()

        logger.debug("Inserted movie id=%s", movie.id)
        return movie

    def get(self, movie_id: int) -> Movie:
        """
        Fetch a movie by id.

        Raises:
            RecordNotFoundError: If movie_id < 1 or no row matches
        """
        if movie_id < 1:
            raise RecordNotFoundError()

        stmt = (
            select(MovieRow)
            .where(MovieRow.id == movie_id)
            .execution_options(populate_existing=True)
        )
        with self._deadline("get movie"):
            row = self.session.execute(stmt).scalar_one_or_none()

        if row is None:
            raise RecordNotFoundError()
        return _to_movie(row)

    def update(self, movie: Movie) -> int:
        """
        Write a movie back if its version is still current.

        A missing row and a stale version are both reported as an edit
        conflict; callers that need to tell them apart must re-fetch.

        Returns:
            The new version, also stored on ``movie``

        Raises:
            EditConflictError: If no row has the movie's id and version
        """
        stmt = (
            update(MovieRow)
            .where(MovieRow.id == movie.id, MovieRow.version == movie.version)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres or []),
                version=MovieRow.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        with self._deadline("update movie"):
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                raise EditConflictError()
            self.session.commit()

        movie.version += 1
        logger.debug("Updated movie id=%s to version %s", movie.id, movie.version)
        return movie.version

    def delete(self, movie_id: int) -> None:
        """
        Delete a movie by id, regardless of its version.

        Raises:
            RecordNotFoundError: If movie_id < 1 or no row was deleted
        """
        if movie_id < 1:
            raise RecordNotFoundError()

        stmt = (
            delete(MovieRow)
            .where(MovieRow.id == movie_id)
            .execution_options(synchronize_session=False)
        )
        with self._deadline("delete movie"):
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                raise RecordNotFoundError()
            self.session.commit()

        logger.debug("Deleted movie id=%s", movie_id)

    def get_all(
        self,
        title: str,
        genres: Optional[List[str]],
        filters: Filters
    ) -> Tuple[List[Movie], Metadata]:
        """
        List movies matching a title search and genre filter.

        The total match count comes from a window aggregate in the same
        query, repeated on every returned row.

        Args:
            title: Words that must all appear in the title ("" matches all)
            genres: Genres every row must contain (empty matches all)
            filters: Validated page, page size and sort

        Returns:
            Tuple of (movies on the requested page, pagination metadata)
        """
        sort_column = MovieRow.__table__.c[filters.sort_column()]
        if filters.sort_direction() == "DESC":
            order = sort_column.desc()
        else:
            order = sort_column.asc()

        stmt = select(func.count().over().label("total_records"), MovieRow)

        if title:
            stmt = stmt.where(func.title_matches(MovieRow.title, title) == 1)

        for genre in genres or []:
            elements = func.json_each(MovieRow.genres).table_valued("value")
            stmt = stmt.where(
                select(elements.c.value).where(elements.c.value == genre).exists()
            )

        stmt = (
            stmt.order_by(order, MovieRow.id.asc())
            .limit(filters.limit())
            .offset(filters.offset())
            .execution_options(populate_existing=True)
        )

        with self._deadline("list movies"):
            rows = self.session.execute(stmt).all()

        total_records = rows[0].total_records if rows else 0
        movies = [_to_movie(movie_row) for _, movie_row in rows]
        metadata = calculate_metadata(total_records, filters.page, filters.page_size)

        logger.debug("Listed %d of %d movies", len(movies), total_records)
        return movies, metadata
