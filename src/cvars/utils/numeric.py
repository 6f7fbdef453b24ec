"""Locale-independent numeric parsing with a zero fallback."""

from __future__ import annotations

import re

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")
_FLOAT_RE = re.compile(
    r"""^\s*[+-]?
    (?:
        (?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
        |infinity
        |nan
    )\s*$""",
    re.IGNORECASE | re.VERBOSE,
)


def parse_int(text: str | None) -> int:
    """Parse a base-10 signed 32-bit integer, returning 0 when it does not fit or parse."""

    if text is None or not _INT_RE.match(text):
        return 0
    value = int(text.strip())
    if value < INT32_MIN or value > INT32_MAX:
        return 0
    return value


def parse_float(text: str | None) -> float:
    if text is None or not _FLOAT_RE.match(text):
        return 0.0
    return float(text.strip())
