"""
Core domain logic: movie rules, listing filters and the runtime wire codec.
"""

from movie_catalog.core.filters import Filters, Metadata, calculate_metadata, validate_filters
from movie_catalog.core.movie import Movie, validate_movie
from movie_catalog.core.runtime import decode_runtime, encode_runtime
from movie_catalog.core.validator import Validator

__all__ = [
    'Filters',
    'Metadata',
    'calculate_metadata',
    'validate_filters',
    'Movie',
    'validate_movie',
    'decode_runtime',
    'encode_runtime',
    'Validator',
]
