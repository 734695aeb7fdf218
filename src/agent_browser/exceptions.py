"""Custom exception hierarchy for agent-browser.

All exceptions that cross layer boundaries must inherit from
:class:`AgentBrowserError`.  Raw decoding or filesystem exceptions must
NEVER propagate beyond the layer that triggered them — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
AgentBrowserError
├── ParseError
│   ├── UnknownCommandError
│   ├── UnknownSubcommandError
│   ├── MissingArgumentsError
│   ├── InvalidValueError
│   └── InvalidSessionNameError
├── ConfigError
│   ├── ConfigFormatError
│   └── ConfigLoadError
├── TransportError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class AgentBrowserError(Exception):
    """Base exception for all agent-browser errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command compilation ---------------------------------------------------

class ParseError(AgentBrowserError):
    """Base for every error detected while compiling a command line.

    Parse errors never carry a partial envelope.  They are rendered by
    :mod:`agent_browser.core.error_format`, which knows how to attach
    usage text for each variant.
    """


class UnknownCommandError(ParseError):
    """Raised when the verb is not part of the command vocabulary."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Unknown command: {command}")
        self.command: str = command


class UnknownSubcommandError(ParseError):
    """Raised when a verb exists but its subcommand word does not."""

    def __init__(self, subcommand: str, valid_options: Sequence[str]) -> None:
        super().__init__(f"Unknown subcommand: {subcommand}")
        self.subcommand: str = subcommand
        self.valid_options: tuple[str, ...] = tuple(valid_options)
        """Alternatives listed to the user, in declaration order."""


class MissingArgumentsError(ParseError):
    """Raised when a required positional or flag value is absent."""

    def __init__(self, context: str, usage: str) -> None:
        super().__init__(f"Missing arguments for: {context}")
        self.context: str = context
        """Command words identifying where the argument was expected."""
        self.usage: str = usage
        """Correct invocation syntax, without the program name."""


class InvalidValueError(ParseError):
    """Raised when an argument is present but semantically invalid."""

    def __init__(self, message: str, usage: str) -> None:
        super().__init__(message)
        self.message: str = message
        self.usage: str = usage


class InvalidSessionNameError(ParseError):
    """Raised when a session name could escape the state directory."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid session name: {name!r}")
        self.name: str = name


# --- Configuration ---------------------------------------------------------

class ConfigError(AgentBrowserError):
    """Base for configuration file problems."""


class ConfigFormatError(ConfigError):
    """Raised when a config document is not valid JSON or has wrong types."""


class ConfigLoadError(ConfigError):
    """Raised when an explicitly requested config file cannot be used.

    This is the only process-terminating condition of the front-end:
    the CLI aborts before any command is compiled.
    """


# --- Daemon transport ------------------------------------------------------

class TransportError(AgentBrowserError):
    """Raised when an envelope cannot be delivered to the daemon."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(AgentBrowserError):
    """Raised when a required runtime dependency is not available."""
