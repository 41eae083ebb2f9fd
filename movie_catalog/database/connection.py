"""
Database connection management using SQLAlchemy.

This module handles SQLite database connection creation, session management,
and registers the SQL functions the movie queries rely on.
"""

import os
import re
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import Pool

from movie_catalog.database.models import Base


# Default database path
DEFAULT_DB_PATH = "data/movies.db"

# Lock wait outside repository calls; MovieRepository narrows it per call
BUSY_TIMEOUT_SECONDS = 5.0

_WORD = re.compile(r"\w+")


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Get SQLite database URL.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy database URL
    """
    # Ensure directory exists
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    abs_path = os.path.abspath(db_path)
    return f"sqlite:///{abs_path}"


def title_matches(title: Optional[str], query: Optional[str]) -> int:
    """
    Word match used by the title search.

    Every word of ``query`` must appear as a whole word of ``title``,
    compared case-insensitively. A query without any words matches nothing.

    Returns:
        1 on match, 0 otherwise (SQLite has no boolean type)
    """
    words = _WORD.findall((query or "").lower())
    if not words:
        return 0
    title_words = set(_WORD.findall((title or "").lower()))
    return int(all(word in title_words for word in words))


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints and register SQL functions for SQLite.

    SQLite disables foreign key constraints by default.
    This event listener enables them for all connections.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_conn.create_function("title_matches", 2, title_matches, deterministic=True)


def clear_deadline(dbapi_conn) -> None:
    """Remove a per-call progress handler and restore the default lock wait."""
    dbapi_conn.set_progress_handler(None, 0)
    dbapi_conn.execute(f"PRAGMA busy_timeout = {int(BUSY_TIMEOUT_SECONDS * 1000)}")


@event.listens_for(Pool, "checkin")
def reset_on_checkin(dbapi_conn, connection_record):
    """
    Drop any deadline left on a connection returned to the pool.

    A repository call that commits or rolls back releases its connection
    before the call finishes, so the next borrower must not inherit it.
    """
    if dbapi_conn is not None:
        clear_deadline(dbapi_conn)


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and database initialization.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, echo: bool = False):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.db_path = db_path
        self.database_url = get_database_url(db_path)

        # Default pool: each session checks out its own connection
        self.engine = create_engine(
            self.database_url,
            echo=echo,
            connect_args={
                "check_same_thread": False,
                "timeout": BUSY_TIMEOUT_SECONDS,
            },
        )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        """
        Drop and recreate all tables.

        WARNING: This will delete all data in the database!
        """
        self.drop_tables()
        self.create_tables()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Automatically commits on success and rolls back on failure.

        Usage:
            with db_manager.session_scope() as session:
                repo = MovieRepository(session)
                repo.insert(movie)

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()


# Global database manager instance (singleton pattern)
_db_manager = None


def get_db_manager(db_path: str = DEFAULT_DB_PATH, echo: bool = False) -> DatabaseManager:
    """
    Get or create the global database manager instance.

    Args:
        db_path: Path to SQLite database file
        echo: If True, log all SQL statements

    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(db_path=db_path, echo=echo)
    return _db_manager
