"""Domain models for agent-browser.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are constructed once per invocation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

ActionEnvelope = dict[str, Any]
"""JSON-ready request sent to the daemon.

Insertion ordered; the first two keys are always ``id`` and ``action``.
"""


# ---------------------------------------------------------------------------
# Config file contents
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Config:
    """Options read from one JSON config document (or a merge of two).

    Every field is optional: ``None`` means the document did not set it,
    which lets a lower-precedence source show through when merging.
    """

    headed: bool | None = None
    json: bool | None = None
    full: bool | None = None
    debug: bool | None = None
    session: str | None = None
    session_name: str | None = None
    executable_path: str | None = None
    extensions: tuple[str, ...] | None = None
    """Browser extension paths.  Concatenated, not overridden, on merge."""

    profile: str | None = None
    state: str | None = None
    proxy: str | None = None
    proxy_bypass: str | None = None
    args: str | None = None
    user_agent: str | None = None
    provider: str | None = None
    device: str | None = None
    ignore_https_errors: bool | None = None
    allow_file_access: bool | None = None
    cdp: str | None = None
    auto_connect: bool | None = None
    headers: str | None = None
    """Raw JSON text of extra HTTP headers, decoded only by ``open``."""

    annotate: bool | None = None
    color_scheme: str | None = None


ConfigOrigin = Literal["user", "project", "explicit"]
ConfigStatus = Literal["loaded", "absent", "invalid"]


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Outcome of consulting one config file location."""

    origin: ConfigOrigin
    path: Path
    status: ConfigStatus
    detail: str | None = None
    """Decoding or I/O error text when ``status == "invalid"``."""


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    """Merged configuration plus the provenance of each consulted file."""

    config: Config
    sources: tuple[ConfigSource, ...] = ()


# ---------------------------------------------------------------------------
# Process environment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvironmentSnapshot:
    """Immutable copy of the process state the resolver depends on.

    Captured once at start-up and passed explicitly so that nothing in
    the compile path reads ``os.environ`` behind the caller's back.
    """

    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    home: Path = Path("~")
    cwd: Path = Path(".")

    def get(self, name: str) -> str | None:
        """Return the value of environment variable *name*, if set."""
        return self.variables.get(name)


# ---------------------------------------------------------------------------
# Resolved runtime options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Final runtime options for one invocation.

    Built by :func:`agent_browser.core.flag_resolver.resolve_options`
    from CLI flags, environment variables, and config files.  The
    ``cli_*`` fields record whether a value came from an explicit
    command-line flag, which the daemon-launch logic uses to decide
    whether a running browser must be restarted.
    """

    json: bool = False
    full: bool = False
    headed: bool = False
    debug: bool = False
    session: str = "default"
    headers: str | None = None
    executable_path: str | None = None
    cdp: str | None = None
    extensions: tuple[str, ...] = ()
    profile: str | None = None
    state: str | None = None
    proxy: str | None = None
    proxy_bypass: str | None = None
    args: str | None = None
    user_agent: str | None = None
    provider: str | None = None
    ignore_https_errors: bool = False
    allow_file_access: bool = False
    device: str | None = None
    auto_connect: bool = False
    session_name: str | None = None
    annotate: bool = False
    color_scheme: str | None = None

    cli_executable_path: bool = False
    cli_extensions: bool = False
    cli_profile: bool = False
    cli_state: bool = False
    cli_args: bool = False
    cli_user_agent: bool = False
    cli_proxy: bool = False
    cli_proxy_bypass: bool = False
    cli_allow_file_access: bool = False
    cli_annotate: bool = False
