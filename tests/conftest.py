"""Shared pytest fixtures and configuration for the agent-browser test suite.

Guidelines
----------
* No daemon, no browser, no network in any test.
* Core tests must be pure — envelopes are built with a fixed id.
* Config files live under ``tmp_path``; the real home directory and
  process environment are never consulted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from types import MappingProxyType
from typing import Any

import pytest

from agent_browser.core.compiler import compile_command
from agent_browser.core.models import ActionEnvelope, EnvironmentSnapshot, ResolvedOptions

FIXED_ID = "r000000test"

Compile = Callable[..., ActionEnvelope]


def fixed_id() -> str:
    return FIXED_ID


def no_stdin() -> Iterable[str]:
    raise AssertionError("stdin must not be read")


@pytest.fixture
def compile_tokens() -> Compile:
    """Compile a token list with a fixed id; keyword args override options."""

    def _compile(tokens: list[str], **overrides: Any) -> ActionEnvelope:
        return compile_command(
            tokens,
            ResolvedOptions(**overrides),
            id_generator=fixed_id,
            read_stdin=no_stdin,
        )

    return _compile


@pytest.fixture
def make_env(tmp_path: Path) -> Callable[..., EnvironmentSnapshot]:
    """Build an environment snapshot rooted in ``tmp_path``."""

    def _make(**variables: str) -> EnvironmentSnapshot:
        home = tmp_path / "home"
        cwd = tmp_path / "project"
        home.mkdir(exist_ok=True)
        cwd.mkdir(exist_ok=True)
        return EnvironmentSnapshot(
            variables=MappingProxyType(dict(variables)),
            home=home,
            cwd=cwd,
        )

    return _make
