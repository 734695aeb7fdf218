"""Strict conversion of command-line tokens to numbers.

Python's ``int()`` and ``float()`` are lenient: they accept surrounding
whitespace, ``_`` digit separators, and non-ASCII digits.  Command
arguments must match a narrower grammar so that ``"1_000"`` or
``" 5"`` are treated as text (a selector, say) rather than a number.

Every helper returns ``None`` instead of raising, which lets callers
fall back to an alternative interpretation of the token.
"""

from __future__ import annotations

import math
import re

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_bounded(token: str, pattern: re.Pattern[str], low: int, high: int) -> int | None:
    if not pattern.fullmatch(token):
        return None
    value = int(token)
    if value < low or value > high:
        return None
    return value


def parse_i32(token: str) -> int | None:
    """Parse a signed 32-bit integer."""
    return _parse_bounded(token, _SIGNED_RE, -(2**31), 2**31 - 1)


def parse_i64(token: str) -> int | None:
    """Parse a signed 64-bit integer."""
    return _parse_bounded(token, _SIGNED_RE, -(2**63), 2**63 - 1)


def parse_u32(token: str) -> int | None:
    """Parse an unsigned 32-bit integer (no leading ``-``)."""
    return _parse_bounded(token, _UNSIGNED_RE, 0, 2**32 - 1)


def parse_u64(token: str) -> int | None:
    """Parse an unsigned 64-bit integer (no leading ``-``)."""
    return _parse_bounded(token, _UNSIGNED_RE, 0, 2**64 - 1)


def parse_float(token: str) -> float | None:
    """Parse a decimal or scientific float.

    ``inf`` and ``nan`` spellings are accepted, so callers that need a
    finite value must check with :func:`math.isfinite` or a range test.
    """
    if not _FLOAT_RE.fullmatch(token):
        return None
    return float(token)


def is_finite_in_range(value: float, low: float, high: float) -> bool:
    """Return ``True`` when *value* is finite and ``low <= value <= high``."""
    return math.isfinite(value) and low <= value <= high
