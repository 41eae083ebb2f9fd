"""
Unit tests for movie and filter validation rules.
"""

from datetime import datetime

import pytest

from movie_catalog.core.filters import Filters, validate_filters
from movie_catalog.core.movie import Movie, validate_movie
from movie_catalog.core.validator import Validator, permitted_value, unique

SAFELIST = ["id", "title", "year", "runtime", "-id", "-title", "-year", "-runtime"]


def valid_movie(**overrides) -> Movie:
    fields = dict(title="Casablanca", year=1942, runtime=102, genres=["drama", "romance", "war"])
    fields.update(overrides)
    return Movie(**fields)


def movie_errors(movie: Movie) -> dict:
    v = Validator()
    validate_movie(v, movie)
    return v.errors


class TestValidator:
    """Tests for the error collector and helpers."""

    def test_first_error_per_field_kept(self):
        v = Validator()
        v.add_error("title", "first")
        v.add_error("title", "second")
        assert v.errors == {"title": "first"}
        assert not v.valid()

    def test_check_passing_records_nothing(self):
        v = Validator()
        v.check(True, "title", "must be provided")
        assert v.valid()

    def test_unique(self):
        assert unique(["a", "b"])
        assert not unique(["a", "a"])
        assert unique([])

    def test_permitted_value(self):
        assert permitted_value("id", "id", "title")
        assert not permitted_value("x", "id", "title")


class TestValidateMovie:
    """Tests for validate_movie."""

    def test_valid_movie_has_no_errors(self):
        assert movie_errors(valid_movie()) == {}

    def test_current_year_is_allowed(self):
        assert movie_errors(valid_movie(year=datetime.now().year)) == {}

    def test_five_genres_allowed(self):
        assert movie_errors(valid_movie(genres=["a", "b", "c", "d", "e"])) == {}

    @pytest.mark.parametrize("overrides,field,message", [
        ({"title": ""}, "title", "must be provided"),
        ({"title": "x" * 501}, "title", "must not be more than 500 bytes long"),
        ({"year": 0}, "year", "must be provided"),
        ({"year": 1887}, "year", "must be greater than 1888"),
        ({"year": datetime.now().year + 1}, "year", "must not be in the future"),
        ({"runtime": 0}, "runtime", "must be provided"),
        ({"runtime": -5}, "runtime", "must be a positive integer"),
        ({"genres": None}, "genres", "must be provided"),
        ({"genres": []}, "genres", "must contain at least 1 genre"),
        ({"genres": ["a", "b", "c", "d", "e", "f"]}, "genres", "must not contain more than 5 genres"),
        ({"genres": ["drama", "drama"]}, "genres", "must not contain duplicate values"),
    ])
    def test_single_rule_violation(self, overrides, field, message):
        errors = movie_errors(valid_movie(**overrides))
        assert errors == {field: message}

    def test_title_limit_counts_bytes(self):
        # 250 two-byte characters are 500 bytes, one more exceeds the limit
        assert movie_errors(valid_movie(title="é" * 250)) == {}
        assert "title" in movie_errors(valid_movie(title="é" * 251))

    def test_all_rules_evaluated(self):
        errors = movie_errors(Movie())
        assert set(errors) == {"title", "year", "runtime", "genres"}


class TestValidateFilters:
    """Tests for validate_filters."""

    def _errors(self, **kwargs) -> dict:
        v = Validator()
        validate_filters(v, Filters(sort_safelist=SAFELIST, **kwargs))
        return v.errors

    def test_defaults_are_valid(self):
        assert self._errors() == {}

    def test_bounds_are_valid(self):
        assert self._errors(page=10_000_000, page_size=100, sort="-runtime") == {}

    @pytest.mark.parametrize("kwargs,field", [
        ({"page": 0}, "page"),
        ({"page": 10_000_001}, "page"),
        ({"page_size": 0}, "page_size"),
        ({"page_size": 101}, "page_size"),
        ({"sort": "created_at"}, "sort"),
        ({"sort": "id; DROP TABLE movies"}, "sort"),
    ])
    def test_invalid_filters(self, kwargs, field):
        assert list(self._errors(**kwargs)) == [field]

    def test_violations_accumulate(self):
        errors = self._errors(page=0, page_size=0, sort="bogus")
        assert set(errors) == {"page", "page_size", "sort"}
