"""Core layer — pure command compilation and option resolution.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.  The single exception is the stdin
  read for ``eval --stdin``, performed through an injectable reader.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic, given a fixed
  id generator.
"""

from agent_browser.core.compiler import CommandCompiler, compile_command
from agent_browser.core.config_merge import merge_configs, parse_config_document
from agent_browser.core.error_format import format_parse_error, format_parse_error_json
from agent_browser.core.flag_resolver import (
    extract_config_path,
    resolve_options,
    strip_global_flags,
)
from agent_browser.core.models import (
    ActionEnvelope,
    Config,
    EnvironmentSnapshot,
    LoadedConfig,
    ResolvedOptions,
)

__all__: list[str] = [
    "ActionEnvelope",
    "CommandCompiler",
    "Config",
    "EnvironmentSnapshot",
    "LoadedConfig",
    "ResolvedOptions",
    "compile_command",
    "extract_config_path",
    "format_parse_error",
    "format_parse_error_json",
    "merge_configs",
    "parse_config_document",
    "resolve_options",
    "strip_global_flags",
]
