"""Resolution of global options from CLI flags, environment and config.

Every global flag is declared once in :data:`GLOBAL_FLAGS`.  The same
table drives three passes over the raw argument vector:

1. :func:`extract_config_path`: locate ``--config`` before anything
   else is parsed, stepping over the values of other value flags.
2. :func:`resolve_options`: build :class:`ResolvedOptions`.
3. :func:`strip_global_flags`: remove global flags so command grammars
   only see their own tokens.

Precedence, per field: CLI flag > environment variable > merged config
> built-in default.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from agent_browser.core.models import Config, EnvironmentSnapshot, ResolvedOptions

FlagKind = Literal["bool", "value", "append"]

ENV_PREFIX: str = "AGENT_BROWSER_"
CONFIG_ENV_VAR: str = f"{ENV_PREFIX}CONFIG"
EXTENSIONS_ENV_VAR: str = f"{ENV_PREFIX}EXTENSIONS"

_BOOL_LITERALS: dict[str, bool] = {"true": True, "false": False}
_FALSY_ENV_VALUES: frozenset[str] = frozenset({"0", "false", "no"})


# ---------------------------------------------------------------------------
# Declarative tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GlobalFlag:
    """One global command-line flag."""

    names: tuple[str, ...]
    field: str | None
    """:class:`ResolvedOptions` field, or ``None`` for ``--config``."""

    kind: FlagKind
    tracks_cli: bool = False
    """Whether setting it also sets the matching ``cli_*`` field."""


GLOBAL_FLAGS: tuple[GlobalFlag, ...] = (
    GlobalFlag(("--json",), "json", "bool"),
    GlobalFlag(("--full", "-f"), "full", "bool"),
    GlobalFlag(("--headed",), "headed", "bool"),
    GlobalFlag(("--debug",), "debug", "bool"),
    GlobalFlag(("--ignore-https-errors",), "ignore_https_errors", "bool"),
    GlobalFlag(("--allow-file-access",), "allow_file_access", "bool", tracks_cli=True),
    GlobalFlag(("--auto-connect",), "auto_connect", "bool"),
    GlobalFlag(("--annotate",), "annotate", "bool", tracks_cli=True),
    GlobalFlag(("--session",), "session", "value"),
    GlobalFlag(("--headers",), "headers", "value"),
    GlobalFlag(("--executable-path",), "executable_path", "value", tracks_cli=True),
    GlobalFlag(("--cdp",), "cdp", "value"),
    GlobalFlag(("--extension",), "extensions", "append", tracks_cli=True),
    GlobalFlag(("--profile",), "profile", "value", tracks_cli=True),
    GlobalFlag(("--state",), "state", "value", tracks_cli=True),
    GlobalFlag(("--proxy",), "proxy", "value", tracks_cli=True),
    GlobalFlag(("--proxy-bypass",), "proxy_bypass", "value", tracks_cli=True),
    GlobalFlag(("--args",), "args", "value", tracks_cli=True),
    GlobalFlag(("--user-agent",), "user_agent", "value", tracks_cli=True),
    GlobalFlag(("-p", "--provider"), "provider", "value"),
    GlobalFlag(("--device",), "device", "value"),
    GlobalFlag(("--session-name",), "session_name", "value"),
    GlobalFlag(("--color-scheme",), "color_scheme", "value"),
    GlobalFlag(("--config",), None, "value"),
)

_FLAG_LOOKUP: dict[str, GlobalFlag] = {
    name: flag for flag in GLOBAL_FLAGS for name in flag.names
}

BOOL_ENV_VARS: dict[str, str] = {
    "json": f"{ENV_PREFIX}JSON",
    "full": f"{ENV_PREFIX}FULL",
    "headed": f"{ENV_PREFIX}HEADED",
    "debug": f"{ENV_PREFIX}DEBUG",
    "ignore_https_errors": f"{ENV_PREFIX}IGNORE_HTTPS_ERRORS",
    "allow_file_access": f"{ENV_PREFIX}ALLOW_FILE_ACCESS",
    "auto_connect": f"{ENV_PREFIX}AUTO_CONNECT",
    "annotate": f"{ENV_PREFIX}ANNOTATE",
}
"""Boolean :class:`ResolvedOptions` field → environment variable."""

STRING_ENV_VARS: dict[str, str] = {
    "session": f"{ENV_PREFIX}SESSION",
    "headers": f"{ENV_PREFIX}HEADERS",
    "executable_path": f"{ENV_PREFIX}EXECUTABLE_PATH",
    "cdp": f"{ENV_PREFIX}CDP",
    "profile": f"{ENV_PREFIX}PROFILE",
    "state": f"{ENV_PREFIX}STATE",
    "proxy": f"{ENV_PREFIX}PROXY",
    "proxy_bypass": f"{ENV_PREFIX}PROXY_BYPASS",
    "args": f"{ENV_PREFIX}ARGS",
    "user_agent": f"{ENV_PREFIX}USER_AGENT",
    "provider": f"{ENV_PREFIX}PROVIDER",
    "device": f"{ENV_PREFIX}IOS_DEVICE",
    "session_name": f"{ENV_PREFIX}SESSION_NAME",
    "color_scheme": f"{ENV_PREFIX}COLOR_SCHEME",
}
"""String :class:`ResolvedOptions` field → environment variable."""

DEFAULT_SESSION: str = "default"


# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------

def is_truthy(value: str | None) -> bool:
    """Interpret an environment variable as a boolean.

    Absent, empty, and case-insensitive ``0``/``false``/``no`` are
    false; anything else is true.
    """
    if not value:
        return False
    return value.lower() not in _FALSY_ENV_VALUES


def split_env_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated variable, trimming and dropping empties."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


# ---------------------------------------------------------------------------
# Pass 1: --config detection
# ---------------------------------------------------------------------------

def extract_config_path(args: Sequence[str]) -> tuple[bool, str | None]:
    """Find an explicit ``--config`` flag in raw *args*.

    The value token of every other value-taking global flag is skipped,
    so ``--args --config`` passes ``--config`` as the browser args
    rather than being read as the flag.

    Returns
    -------
    tuple[bool, str | None]
        ``(found, path)``.  ``(True, None)`` means ``--config`` was the
        last token and has no path.
    """
    i = 0
    while i < len(args):
        token = args[i]
        if token == "--config":
            return True, args[i + 1] if i + 1 < len(args) else None
        flag = _FLAG_LOOKUP.get(token)
        if flag is not None and flag.kind != "bool":
            i += 2
        else:
            i += 1
    return False, None


# ---------------------------------------------------------------------------
# Pass 2: resolution
# ---------------------------------------------------------------------------

def _base_values(config: Config, env: EnvironmentSnapshot) -> dict[str, Any]:
    values: dict[str, Any] = {}

    for name, var in BOOL_ENV_VARS.items():
        raw = env.get(var)
        if raw:
            values[name] = is_truthy(raw)
        else:
            values[name] = bool(getattr(config, name))

    for name, var in STRING_ENV_VARS.items():
        raw = env.get(var)
        values[name] = raw if raw else getattr(config, name)

    if values["session"] is None:
        values["session"] = DEFAULT_SESSION

    env_extensions = split_env_list(env.get(EXTENSIONS_ENV_VAR))
    values["extensions"] = env_extensions or (config.extensions or ())
    return values


def _apply_cli_flags(args: Sequence[str], values: dict[str, Any]) -> None:
    i = 0
    while i < len(args):
        flag = _FLAG_LOOKUP.get(args[i])
        if flag is None:
            i += 1
            continue

        following = args[i + 1] if i + 1 < len(args) else None

        if flag.kind == "bool":
            if following in _BOOL_LITERALS:
                values[flag.field] = _BOOL_LITERALS[following]
                i += 2
            else:
                values[flag.field] = True
                i += 1
        else:
            if following is None:
                i += 1
                continue
            if flag.kind == "append":
                values[flag.field] = (*values[flag.field], following)
            elif flag.field is not None:
                values[flag.field] = following
            i += 2

        if flag.tracks_cli:
            values[f"cli_{flag.field}"] = True


def resolve_options(
    args: Sequence[str],
    config: Config,
    env: EnvironmentSnapshot,
) -> ResolvedOptions:
    """Combine every option source into one :class:`ResolvedOptions`.

    Parameters
    ----------
    args:
        Raw command-line arguments (global flags anywhere).
    config:
        Merged config, see :func:`agent_browser.infra.config_loader.load_config`.
    env:
        Environment captured at start-up.

    Notes
    -----
    A boolean environment variable that is set and non-empty decides
    its field outright, so ``AGENT_BROWSER_HEADED=false`` switches off
    ``"headed": true`` from a config file.  ``AGENT_BROWSER_EXTENSIONS``
    replaces the config list; each ``--extension`` flag appends to the
    result.
    """
    values = _base_values(config, env)
    _apply_cli_flags(args, values)
    return ResolvedOptions(**values)


# ---------------------------------------------------------------------------
# Pass 3: stripping
# ---------------------------------------------------------------------------

def strip_global_flags(args: Sequence[str]) -> list[str]:
    """Return *args* without global flags and the values they consumed.

    Value flags always drop the following token; boolean flags drop a
    following ``true``/``false`` literal only.
    """
    remaining: list[str] = []
    i = 0
    while i < len(args):
        flag = _FLAG_LOOKUP.get(args[i])
        if flag is None:
            remaining.append(args[i])
            i += 1
        elif flag.kind == "bool":
            i += 1
            if i < len(args) and args[i] in _BOOL_LITERALS:
                i += 1
        else:
            i += 2
    return remaining
