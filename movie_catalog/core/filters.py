"""
Listing parameters: pagination, sorting and result-set metadata.

The sort column is the only piece of listing SQL built from request input,
so it is resolved through a caller-supplied safelist before use.
"""

import math
from dataclasses import dataclass, field
from typing import List

from movie_catalog.core.validator import Validator, permitted_value

MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100


@dataclass
class Filters:
    """
    Page, page size and sort key for a listing request.

    Attributes:
        page: 1-based page number
        page_size: Rows per page
        sort: Column name, optionally prefixed with "-" for descending order
        sort_safelist: Accepted sort values, including the "-" forms
    """

    page: int = 1
    page_size: int = 20
    sort: str = "id"
    sort_safelist: List[str] = field(default_factory=list)

    def sort_column(self) -> str:
        """
        Resolve the sort value to a bare column name.

        Raises:
            ValueError: If the sort value is not in the safelist
        """
        if self.sort in self.sort_safelist:
            return self.sort.removeprefix("-")
        raise ValueError(f"unsafe sort parameter: {self.sort!r}")

    def sort_direction(self) -> str:
        return "DESC" if self.sort.startswith("-") else "ASC"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Metadata:
    """Pagination summary of a listing; all zero for an empty result."""

    current_page: int = 0
    page_size: int = 0
    last_page: int = 0
    total_records: int = 0


def calculate_metadata(total_records: int, page: int, page_size: int) -> Metadata:
    """
    Build pagination metadata for a result set.

    Args:
        total_records: Rows matching the filters before pagination
        page: Requested page
        page_size: Requested page size

    Returns:
        Metadata, zero-valued when no rows matched
    """
    if total_records == 0:
        return Metadata()

    return Metadata(
        current_page=page,
        page_size=page_size,
        last_page=math.ceil(total_records / page_size),
        total_records=total_records,
    )


def validate_filters(v: Validator, filters: Filters) -> None:
    """Record page, page size and sort violations on ``v``."""
    v.check(filters.page > 0, "page", "must be greater than zero")
    v.check(filters.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(filters.page_size > 0, "page_size", "must be greater than zero")
    v.check(filters.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100")
    v.check(permitted_value(filters.sort, *filters.sort_safelist), "sort", "invalid sort value")
