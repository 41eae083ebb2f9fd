"""
SQLAlchemy ORM models for the movie catalog database.

The movies table carries a version column used as an optimistic
concurrency token: every successful update increments it by one.
"""

from datetime import datetime
from typing import List
from sqlalchemy import (
    Integer, Text, JSON, CheckConstraint, Index, TIMESTAMP, text
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class MovieRow(Base):
    """
    Movie table.

    Attributes:
        id: Primary key, assigned by the store
        created_at: Timestamp when record was created
        title: Movie title (required)
        year: Release year (1888 or later)
        runtime: Runtime in minutes
        genres: Ordered JSON array of 1 to 5 genre names
        version: Concurrency token, starts at 1
    """
    __tablename__ = 'movies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False)
    genres: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text('1'))

    __table_args__ = (
        CheckConstraint('year >= 1888', name='movies_year_check'),
        CheckConstraint('runtime >= 0', name='movies_runtime_check'),
        CheckConstraint(
            'json_array_length(genres) BETWEEN 1 AND 5',
            name='genres_length_check'
        ),
        Index('idx_movies_title', 'title'),
        Index('idx_movies_year', 'year'),
    )

    def __repr__(self) -> str:
        return f"<MovieRow(id={self.id}, title='{self.title}', year={self.year}, version={self.version})>"
