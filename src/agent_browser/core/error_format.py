"""Rendering of :class:`~agent_browser.exceptions.ParseError` values.

Pure functions only; the CLI layer decides where the text goes.
"""

from __future__ import annotations

from typing import Any

from agent_browser.core.session_names import session_name_error
from agent_browser.exceptions import (
    InvalidSessionNameError,
    InvalidValueError,
    MissingArgumentsError,
    ParseError,
    UnknownCommandError,
    UnknownSubcommandError,
)

PROGRAM_NAME = "agent-browser"

_ERROR_TYPES: tuple[tuple[type[ParseError], str], ...] = (
    (UnknownCommandError, "unknown_command"),
    (UnknownSubcommandError, "unknown_subcommand"),
    (MissingArgumentsError, "missing_arguments"),
    (InvalidValueError, "invalid_value"),
    (InvalidSessionNameError, "invalid_session_name"),
)


def format_parse_error(error: ParseError) -> str:
    """Return the multi-line, human-readable message for *error*.

    Examples
    --------
    * ``Unknown command: foo``
    * ``Unknown subcommand: bar\\nValid options: a, b``
    * ``Missing arguments for: pdf\\nUsage: agent-browser pdf <path>``
    """
    if isinstance(error, UnknownCommandError):
        return f"Unknown command: {error.command}"
    if isinstance(error, UnknownSubcommandError):
        return (
            f"Unknown subcommand: {error.subcommand}\n"
            f"Valid options: {', '.join(error.valid_options)}"
        )
    if isinstance(error, MissingArgumentsError):
        return (
            f"Missing arguments for: {error.context}\n"
            f"Usage: {PROGRAM_NAME} {error.usage}"
        )
    if isinstance(error, InvalidValueError):
        return f"{error.message}\nUsage: {PROGRAM_NAME} {error.usage}"
    if isinstance(error, InvalidSessionNameError):
        return session_name_error(error.name)
    return str(error)


def error_type(error: ParseError) -> str:
    """Return the machine-readable category of *error* (``unknown_command``...)."""
    for error_class, name in _ERROR_TYPES:
        if isinstance(error, error_class):
            return name
    return "parse_error"


def format_parse_error_json(error: ParseError) -> dict[str, Any]:
    """Return the JSON-mode error object for *error*.

    Newlines are collapsed to spaces so that the message fits on one
    line of a log.
    """
    return {
        "success": False,
        "error": format_parse_error(error).replace("\n", " "),
        "type": error_type(error),
    }
