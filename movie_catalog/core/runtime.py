"""
Wire codec for movie runtimes.

A runtime is held as an integer count of minutes but travels over JSON as a
quoted string of digits (``"102"`` rather than ``102``). Every other numeric
field uses plain JSON numbers.
"""

import json
import re
from typing import Any, Union

from movie_catalog.exceptions import InvalidRuntimeFormatError

_DIGITS = re.compile(r"[0-9]+")

# Stored as a 32-bit count of minutes
MAX_RUNTIME = 2**31 - 1


def runtime_to_wire(minutes: int) -> str:
    """Return the decimal digits of ``minutes`` as a plain string."""
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
        raise InvalidRuntimeFormatError(f"runtime must be a non-negative integer, got {minutes!r}")
    return str(minutes)


def runtime_from_wire(value: Any) -> int:
    """
    Convert an already-decoded JSON value into minutes.

    Args:
        value: Value taken from a parsed JSON document

    Returns:
        Runtime in minutes

    Raises:
        InvalidRuntimeFormatError: If value is not a string of ASCII digits
    """
    if not isinstance(value, str) or not _DIGITS.fullmatch(value):
        raise InvalidRuntimeFormatError()
    minutes = int(value)
    if minutes > MAX_RUNTIME:
        raise InvalidRuntimeFormatError("runtime out of range")
    return minutes


def encode_runtime(minutes: int) -> str:
    """
    Encode minutes as a JSON string literal.

    Example:
        >>> encode_runtime(102)
        '"102"'
    """
    return json.dumps(runtime_to_wire(minutes))


def decode_runtime(token: Union[str, bytes]) -> int:
    """
    Decode a JSON token produced by :func:`encode_runtime`.

    JSON numbers, floats and strings holding anything other than digits are
    rejected.

    Raises:
        InvalidRuntimeFormatError: If the token is malformed
    """
    try:
        value = json.loads(token)
    except (TypeError, ValueError) as e:
        raise InvalidRuntimeFormatError() from e
    return runtime_from_wire(value)
