"""Infrastructure: locating and reading agent-browser config files.

Two modes exist:

* **explicit**: ``--config <path>`` on the command line, or failing
  that ``AGENT_BROWSER_CONFIG``.  Only that file is read and any problem
  with it is fatal (:class:`~agent_browser.exceptions.ConfigLoadError`).
* **implicit**: ``~/.agent-browser/config.json`` (user) merged with
  ``./agent-browser.json`` (project), project winning.  Missing files
  are skipped silently; unreadable or malformed ones produce a warning
  and are treated as missing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from agent_browser.core.config_merge import merge_configs, parse_config_document
from agent_browser.core.flag_resolver import CONFIG_ENV_VAR, extract_config_path
from agent_browser.core.models import (
    Config,
    ConfigOrigin,
    ConfigSource,
    EnvironmentSnapshot,
    LoadedConfig,
)
from agent_browser.exceptions import ConfigFormatError, ConfigLoadError

USER_CONFIG_DIRNAME: str = ".agent-browser"
USER_CONFIG_FILENAME: str = "config.json"
PROJECT_CONFIG_FILENAME: str = "agent-browser.json"


def _ignore_warning(message: str) -> None:
    return None


def user_config_path(env: EnvironmentSnapshot) -> Path:
    """Return ``~/.agent-browser/config.json`` for the snapshot's home."""
    return env.home / USER_CONFIG_DIRNAME / USER_CONFIG_FILENAME


def project_config_path(env: EnvironmentSnapshot) -> Path:
    """Return ``agent-browser.json`` in the snapshot's working directory."""
    return env.cwd / PROJECT_CONFIG_FILENAME


def _read_config(path: Path) -> Config:
    """Read and decode *path*.

    Raises
    ------
    OSError
        When the file cannot be read.
    ConfigFormatError
        When the contents are not a valid config document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigFormatError(f"not valid UTF-8: {exc}") from exc
    return parse_config_document(text)


# ---------------------------------------------------------------------------
# Explicit config
# ---------------------------------------------------------------------------

def _load_explicit(raw_path: str, env: EnvironmentSnapshot) -> LoadedConfig:
    path = Path(raw_path)
    if not path.is_absolute():
        path = env.cwd / path

    if not path.exists():
        raise ConfigLoadError(
            f"config file not found: {raw_path}",
            hint="Check the --config path or the AGENT_BROWSER_CONFIG variable.",
        )
    try:
        config = _read_config(path)
    except (OSError, ConfigFormatError) as exc:
        raise ConfigLoadError(
            f"failed to load config from {raw_path}",
            hint=str(exc),
        ) from exc
    return LoadedConfig(config=config, sources=(ConfigSource("explicit", path, "loaded"),))


# ---------------------------------------------------------------------------
# Implicit config
# ---------------------------------------------------------------------------

def _load_optional(
    origin: ConfigOrigin,
    path: Path,
    warn: Callable[[str], None],
) -> tuple[Config | None, ConfigSource]:
    if not path.exists():
        return None, ConfigSource(origin, path, "absent")
    try:
        config = _read_config(path)
    except (OSError, ConfigFormatError) as exc:
        warn(f"invalid config file {path}: {exc}")
        return None, ConfigSource(origin, path, "invalid", detail=str(exc))
    return config, ConfigSource(origin, path, "loaded")


def load_config(
    args: Sequence[str],
    env: EnvironmentSnapshot,
    warn: Callable[[str], None] | None = None,
) -> LoadedConfig:
    """Resolve and read the configuration for one invocation.

    Parameters
    ----------
    args:
        Raw command-line arguments, scanned for ``--config``.
    env:
        Environment snapshot supplying ``AGENT_BROWSER_CONFIG``, the home
        directory and the working directory.
    warn:
        Receives warnings about unusable default config files.

    Returns
    -------
    LoadedConfig
        Merged config plus the status of every file consulted.

    Raises
    ------
    ConfigLoadError
        When an explicitly requested config is missing, unreadable or
        malformed, or ``--config`` has no path.
    """
    warn = warn or _ignore_warning

    found, flag_path = extract_config_path(args)
    if found:
        if flag_path is None:
            raise ConfigLoadError("--config requires a file path")
        return _load_explicit(flag_path, env)

    env_path = env.get(CONFIG_ENV_VAR)
    if env_path:
        return _load_explicit(env_path, env)

    user_config, user_source = _load_optional("user", user_config_path(env), warn)
    project_config, project_source = _load_optional(
        "project", project_config_path(env), warn
    )
    merged = merge_configs(user_config or Config(), project_config or Config())
    return LoadedConfig(config=merged, sources=(user_source, project_source))
