"""
Database module for the movie catalog.

This module provides the ORM model, connection management and the movie
repository for the SQLite database using SQLAlchemy.
"""

from movie_catalog.database.models import Base, MovieRow
from movie_catalog.database.connection import DatabaseManager, get_db_manager
from movie_catalog.database.init_db import init_database, verify_schema
from movie_catalog.database.repository import MovieRepository

__all__ = [
    # Models
    'Base',
    'MovieRow',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # Repository
    'MovieRepository',
]
