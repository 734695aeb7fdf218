"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import patch

import pytest

from agent_browser import __version__
from agent_browser.cli import exit_codes
from agent_browser.cli.app import cli, main
from agent_browser.core.models import EnvironmentSnapshot
from agent_browser.exceptions import (
    AgentBrowserError,
    ConfigError,
    ConfigFormatError,
    ConfigLoadError,
    EnvironmentError,
    InvalidSessionNameError,
    InvalidValueError,
    MissingArgumentsError,
    ParseError,
    TransportError,
    UnknownCommandError,
    UnknownSubcommandError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            UnknownCommandError,
            UnknownSubcommandError,
            MissingArgumentsError,
            InvalidValueError,
            InvalidSessionNameError,
        ],
    )
    def test_parse_errors_share_a_base(self, exc_class: type[ParseError]) -> None:
        assert issubclass(exc_class, ParseError)
        assert issubclass(exc_class, AgentBrowserError)

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigError, ConfigFormatError, ConfigLoadError, TransportError, EnvironmentError],
    )
    def test_process_errors_inherit_from_base(
        self, exc_class: type[AgentBrowserError]
    ) -> None:
        assert issubclass(exc_class, AgentBrowserError)

    def test_config_errors_share_a_base(self) -> None:
        assert issubclass(ConfigFormatError, ConfigError)
        assert issubclass(ConfigLoadError, ConfigError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(AgentBrowserError, Exception)

    def test_hint_is_stored(self) -> None:
        err = AgentBrowserError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = AgentBrowserError("boom")
        assert err.hint is None

    def test_unknown_subcommand_keeps_options_as_tuple(self) -> None:
        err = UnknownSubcommandError("x", ["a", "b"])
        assert err.valid_options == ("a", "b")
        assert err.subcommand == "x"

    def test_missing_arguments_fields(self) -> None:
        err = MissingArgumentsError("pdf", "pdf <path>")
        assert err.context == "pdf"
        assert err.usage == "pdf <path>"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "agent-browser" in capsys.readouterr().out

    def test_help_anywhere_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["click", "#btn", "--help"])
        assert code == exit_codes.SUCCESS
        assert "Core Commands:" in capsys.readouterr().out

    def test_only_global_flags_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--json", "--session", "work"])
        assert code == exit_codes.SUCCESS
        assert "usage:" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("agent_browser.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(
        self, _mock_doc: object, make_env: Callable[..., EnvironmentSnapshot],
    ) -> None:
        code = main(["doctor"], env=make_env())
        assert code == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @patch("agent_browser.cli.app.main", side_effect=ConfigLoadError("bad", hint="fix"))
    def test_domain_error_exits_one(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR

    @patch("agent_browser.cli.app.main", side_effect=KeyboardInterrupt)
    def test_keyboard_interrupt_exits_130(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    @patch("agent_browser.cli.app.main", side_effect=RuntimeError("boom"))
    def test_unexpected_error_exits_two(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR

    @patch("agent_browser.cli.app.main", return_value=exit_codes.SUCCESS)
    def test_success_exits_zero(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
