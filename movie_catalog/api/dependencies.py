"""
FastAPI dependency injection for database session and movie repository.
"""

from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from movie_catalog.database.connection import get_db_manager
from movie_catalog.database.repository import MovieRepository
from movie_catalog.api.config import get_database_path, get_query_timeout


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_path = get_database_path()
    db_manager = get_db_manager(db_path=db_path) if db_path.strip() else get_db_manager()
    with db_manager.session_scope() as session:
        yield session


def get_movie_repository(db: Session = Depends(get_db)) -> MovieRepository:
    """Build a movie repository bound to the request's session."""
    return MovieRepository(db, timeout=get_query_timeout())
