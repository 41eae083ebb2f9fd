#!/usr/bin/env python
"""
Database initialization script for the movie catalog.

This script:
1. Creates the database schema (movies table, indexes, constraints)
2. Optionally seeds a handful of sample movies
3. Verifies the schema

Usage:
    # Create tables, keep existing data
    python scripts/init_database.py

    # Drop and recreate, then add sample movies
    python scripts/init_database.py --reset --seed
"""

import argparse
import sys

from movie_catalog.core.movie import Movie, validate_movie
from movie_catalog.core.validator import Validator
from movie_catalog.database import MovieRepository, init_database, verify_schema
from movie_catalog.database.connection import DEFAULT_DB_PATH
from movie_catalog.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

SAMPLE_MOVIES = [
    Movie(title="Casablanca", year=1942, runtime=102, genres=["drama", "romance", "war"]),
    Movie(title="The Breakfast Club", year=1985, runtime=96, genres=["comedy", "drama"]),
    Movie(title="Black Panther", year=2018, runtime=134, genres=["action", "adventure"]),
    Movie(title="Deadpool", year=2016, runtime=108, genres=["action", "comedy"]),
    Movie(title="Moana", year=2016, runtime=107, genres=["animation", "adventure"]),
]


def seed_movies(db_manager) -> int:
    """
    Insert the sample movies.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        Number of movies inserted
    """
    inserted = 0
    with db_manager.session_scope() as session:
        repo = MovieRepository(session)
        for sample in SAMPLE_MOVIES:
            movie = Movie(
                title=sample.title,
                year=sample.year,
                runtime=sample.runtime,
                genres=list(sample.genres),
            )
            v = Validator()
            validate_movie(v, movie)
            if not v.valid():
                logger.warning("Skipping %s: %s", movie.title, v.errors)
                continue
            repo.insert(movie)
            logger.info("Inserted %s (id=%s)", movie.title, movie.id)
            inserted += 1
    return inserted


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the movie catalog database")
    parser.add_argument(
        '--reset',
        action='store_true',
        help='Drop existing tables before creating them'
    )
    parser.add_argument(
        '--seed',
        action='store_true',
        help='Insert sample movies'
    )
    parser.add_argument(
        '--db-path',
        type=str,
        default=DEFAULT_DB_PATH,
        help=f'Path to SQLite database (default: {DEFAULT_DB_PATH})'
    )
    args = parser.parse_args()

    setup_logging(level="INFO")

    db_manager = init_database(db_path=args.db_path, reset=args.reset)
    if args.seed:
        count = seed_movies(db_manager)
        logger.info("Seeded %d movies", count)

    if not verify_schema(db_manager):
        sys.exit(1)
    logger.info("Database initialization successful")


if __name__ == "__main__":
    main()
