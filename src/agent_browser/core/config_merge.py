"""Decoding and merging of JSON config documents.

Config files use camelCase keys (``executablePath``, ``proxyBypass``,
``ignoreHttpsErrors``).  Unknown keys are ignored so that newer config
files keep working with older releases; a known key holding the wrong
JSON type makes the whole document malformed.

Merge rule: the higher-precedence document wins field by field, except
``extensions``, which is concatenated lower-first.
"""

from __future__ import annotations

import json
from dataclasses import fields, replace
from typing import Any

from agent_browser.core.models import Config
from agent_browser.exceptions import ConfigFormatError


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_BOOL_FIELDS: frozenset[str] = frozenset(
    {
        "headed",
        "json",
        "full",
        "debug",
        "ignore_https_errors",
        "allow_file_access",
        "auto_connect",
        "annotate",
    }
)
_LIST_FIELDS: frozenset[str] = frozenset({"extensions"})

CONFIG_KEYS: dict[str, str] = {_camel_case(f.name): f.name for f in fields(Config)}
"""JSON key → :class:`Config` field name."""


def _coerce(key: str, field_name: str, value: Any) -> Any:
    if field_name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigFormatError(f"'{key}' must be a boolean")
        return value
    if field_name in _LIST_FIELDS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigFormatError(f"'{key}' must be a list of strings")
        return tuple(value)
    if not isinstance(value, str):
        raise ConfigFormatError(f"'{key}' must be a string")
    return value


def config_from_mapping(data: Any) -> Config:
    """Build a :class:`Config` from an already-decoded JSON value.

    Raises
    ------
    ConfigFormatError
        When *data* is not an object or a known key has the wrong type.
    """
    if not isinstance(data, dict):
        raise ConfigFormatError("top-level value must be a JSON object")

    values: dict[str, Any] = {}
    for key, value in data.items():
        field_name = CONFIG_KEYS.get(key)
        if field_name is None or value is None:
            continue
        values[field_name] = _coerce(key, field_name, value)
    return Config(**values)


def parse_config_document(text: str) -> Config:
    """Decode config file *text*.

    Parameters
    ----------
    text:
        Raw file contents.

    Raises
    ------
    ConfigFormatError
        On invalid JSON or a type mismatch.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigFormatError(f"invalid JSON: {exc}") from exc
    return config_from_mapping(data)


def merge_configs(base: Config, override: Config) -> Config:
    """Layer *override* on top of *base*.

    Every field set in *override* replaces the one in *base*; unset
    fields fall through.  ``extensions`` lists are concatenated, *base*
    entries first, and stay ``None`` only when neither side sets them.
    """
    changes: dict[str, Any] = {}
    for f in fields(Config):
        if f.name in _LIST_FIELDS:
            continue
        value = getattr(override, f.name)
        if value is not None:
            changes[f.name] = value

    if base.extensions is not None or override.extensions is not None:
        changes["extensions"] = (base.extensions or ()) + (override.extensions or ())
    return replace(base, **changes)
