"""Validation of saved-session names.

Session names become file names inside the daemon's state directory, so
anything that could traverse out of it (``..``, path separators) or
that a file system might reject is refused before a command is sent.
"""

from __future__ import annotations

import re

MAX_SESSION_NAME_LENGTH: int = 255

_ALLOWED_RE = re.compile(r"[A-Za-z0-9._-]+")


def is_valid_session_name(name: str) -> bool:
    """Return ``True`` when *name* is safe to use as a state file stem."""
    if not name or len(name) > MAX_SESSION_NAME_LENGTH:
        return False
    if ".." in name or name == ".":
        return False
    return _ALLOWED_RE.fullmatch(name) is not None


def session_name_error(name: str) -> str:
    """Explain why *name* was rejected by :func:`is_valid_session_name`."""
    return (
        f"Invalid session name: {name!r}\n"
        "Session names may only use letters, digits, '.', '-' and '_' "
        f"(at most {MAX_SESSION_NAME_LENGTH} characters).\n"
        "Path separators and '..' are not allowed."
    )
