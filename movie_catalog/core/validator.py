"""
Field error collector shared by the validation rules.
"""

from typing import Any, Dict, Iterable


class Validator:
    """
    Accumulates field-level validation errors.

    Only the first message recorded for a field is kept, so a value breaking
    several rules for the same field reports one violation.
    """

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def permitted_value(value: Any, *permitted: Any) -> bool:
    """Return True if value is one of the permitted values."""
    return value in permitted


def unique(values: Iterable[Any]) -> bool:
    """Return True if all values are pairwise distinct."""
    values = list(values)
    return len(set(values)) == len(values)
