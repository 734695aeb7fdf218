"""Correlation-token generation for action envelopes.

A token is ``r`` followed by the microsecond-of-second clock reading,
a per-process sequence number, and two random characters.  The clock
part keeps tokens short and roughly ordered; the counter guarantees
uniqueness within a process even when the clock does not advance; the
random suffix separates concurrent processes that start in the same
microsecond.
"""

from __future__ import annotations

import itertools
import secrets
import string
import threading
import time
from collections.abc import Callable

_ALPHABET = string.digits + string.ascii_lowercase


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


class RequestIdGenerator:
    """Callable producing a fresh request id on every call.

    Parameters
    ----------
    clock:
        Returns the current time in nanoseconds.  Injectable for tests.
    random_chars:
        Number of random base-36 characters appended to each token.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], int] = time.time_ns,
        random_chars: int = 2,
    ) -> None:
        self._clock = clock
        self._random_chars = random_chars
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def __call__(self) -> str:
        micros = (self._clock() // 1_000) % 1_000_000
        with self._lock:
            sequence = next(self._counter)
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(self._random_chars))
        return f"r{micros:06d}{_base36(sequence)}{suffix}"
