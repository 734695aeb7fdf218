"""Tests for global option resolution (core/flag_resolver.py).

Coverage:
* Precedence: CLI flag > environment variable > config > default.
* Boolean environment truthiness and boolean flag literals.
* ``extensions`` replacement and appending rules.
* ``cli_*`` explicitness tracking.
* ``--config`` pre-scan and global flag stripping.
"""

from __future__ import annotations

from types import MappingProxyType

import pytest

from agent_browser.core.flag_resolver import (
    GLOBAL_FLAGS,
    extract_config_path,
    is_truthy,
    resolve_options,
    split_env_list,
    strip_global_flags,
)
from agent_browser.core.models import Config, EnvironmentSnapshot, ResolvedOptions


def _env(**variables: str) -> EnvironmentSnapshot:
    return EnvironmentSnapshot(variables=MappingProxyType(dict(variables)))


def _resolve(
    args: list[str],
    config: Config | None = None,
    **variables: str,
) -> ResolvedOptions:
    return resolve_options(args, config or Config(), _env(**variables))


# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------

class TestIsTruthy:
    @pytest.mark.parametrize("value", [None, "", "0", "false", "FALSE", "no", "No"])
    def test_falsy(self, value: str | None) -> None:
        assert is_truthy(value) is False

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on", "anything"])
    def test_truthy(self, value: str) -> None:
        assert is_truthy(value) is True


class TestSplitEnvList:
    def test_trims_and_drops_empty(self) -> None:
        assert split_env_list(" a , ,b,") == ("a", "b")

    def test_absent(self) -> None:
        assert split_env_list(None) == ()


# ---------------------------------------------------------------------------
# Defaults and precedence
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_all_defaults(self) -> None:
        assert _resolve([]) == ResolvedOptions()

    def test_default_session(self) -> None:
        assert _resolve([]).session == "default"

    def test_every_flag_has_a_field(self) -> None:
        field_names = set(ResolvedOptions.__dataclass_fields__)
        for flag in GLOBAL_FLAGS:
            if flag.field is not None:
                assert flag.field in field_names
            if flag.tracks_cli:
                assert f"cli_{flag.field}" in field_names


class TestPrecedence:
    def test_config_applies(self) -> None:
        options = _resolve([], Config(session="cfg", headed=True, proxy="http://p"))
        assert (options.session, options.headed, options.proxy) == ("cfg", True, "http://p")

    def test_env_beats_config(self) -> None:
        options = _resolve([], Config(session="cfg"), AGENT_BROWSER_SESSION="env")
        assert options.session == "env"

    def test_cli_beats_env(self) -> None:
        options = _resolve(["--session", "cli"], Config(session="cfg"), AGENT_BROWSER_SESSION="env")
        assert options.session == "cli"

    def test_empty_env_string_falls_through(self) -> None:
        options = _resolve([], Config(session="cfg"), AGENT_BROWSER_SESSION="")
        assert options.session == "cfg"

    def test_false_env_overrides_true_config(self) -> None:
        options = _resolve([], Config(headed=True), AGENT_BROWSER_HEADED="false")
        assert options.headed is False

    def test_true_env_overrides_false_config(self) -> None:
        options = _resolve([], Config(json=False), AGENT_BROWSER_JSON="1")
        assert options.json is True

    def test_cli_false_literal_beats_env(self) -> None:
        options = _resolve(["--headed", "false"], AGENT_BROWSER_HEADED="1")
        assert options.headed is False

    def test_ios_device_variable(self) -> None:
        assert _resolve([], AGENT_BROWSER_IOS_DEVICE="iPad").device == "iPad"

    @pytest.mark.parametrize("spelling", ["-p", "--provider"])
    def test_provider_spellings(self, spelling: str) -> None:
        assert _resolve([spelling, "ios"]).provider == "ios"


class TestBooleanFlags:
    def test_bare_flag_is_true(self) -> None:
        assert _resolve(["--json"]).json is True

    def test_short_full(self) -> None:
        assert _resolve(["-f"]).full is True

    def test_literal_is_consumed(self) -> None:
        assert _resolve(["--debug", "true"]).debug is True

    def test_other_tokens_are_not_literals(self) -> None:
        options = _resolve(["--headed", "open", "x.test"])
        assert options.headed is True

    def test_value_flag_at_end_is_ignored(self) -> None:
        assert _resolve(["open", "--session"]).session == "default"


class TestExtensions:
    def test_config_list(self) -> None:
        assert _resolve([], Config(extensions=("a", "b"))).extensions == ("a", "b")

    def test_env_replaces_config(self) -> None:
        options = _resolve([], Config(extensions=("a",)), AGENT_BROWSER_EXTENSIONS="x, y")
        assert options.extensions == ("x", "y")

    def test_empty_env_keeps_config(self) -> None:
        options = _resolve([], Config(extensions=("a",)), AGENT_BROWSER_EXTENSIONS=" , ")
        assert options.extensions == ("a",)

    def test_cli_appends(self) -> None:
        options = _resolve(
            ["--extension", "c", "--extension", "d"],
            Config(extensions=("a",)),
        )
        assert options.extensions == ("a", "c", "d")
        assert options.cli_extensions is True


class TestCliTracking:
    def test_tracked_fields(self) -> None:
        options = _resolve(
            ["--profile", "p", "--state", "s.json", "--proxy", "http://p",
             "--proxy-bypass", "localhost", "--args", "--no-sandbox",
             "--user-agent", "UA", "--executable-path", "/bin/chrome",
             "--allow-file-access", "--annotate"]
        )
        assert options.cli_profile and options.cli_state and options.cli_proxy
        assert options.cli_proxy_bypass and options.cli_args and options.cli_user_agent
        assert options.cli_executable_path and options.cli_allow_file_access
        assert options.cli_annotate
        assert options.args == "--no-sandbox"

    def test_config_does_not_mark_cli(self) -> None:
        options = _resolve([], Config(profile="p", annotate=True))
        assert options.profile == "p"
        assert options.cli_profile is False
        assert options.cli_annotate is False

    def test_untracked_flags(self) -> None:
        options = _resolve(["--session", "s"])
        assert not any(
            getattr(options, name) for name in ResolvedOptions.__dataclass_fields__
            if name.startswith("cli_")
        )


# ---------------------------------------------------------------------------
# --config pre-scan
# ---------------------------------------------------------------------------

class TestExtractConfigPath:
    def test_absent(self) -> None:
        assert extract_config_path(["open", "x.test"]) == (False, None)

    def test_present(self) -> None:
        assert extract_config_path(["--json", "--config", "c.json", "open"]) == (True, "c.json")

    def test_last_token(self) -> None:
        assert extract_config_path(["open", "--config"]) == (True, None)

    def test_value_of_other_flag_is_skipped(self) -> None:
        assert extract_config_path(["--args", "--config", "open"]) == (False, None)

    def test_bool_flag_does_not_skip(self) -> None:
        assert extract_config_path(["--headed", "--config", "c.json"]) == (True, "c.json")


# ---------------------------------------------------------------------------
# Stripping
# ---------------------------------------------------------------------------

class TestStripGlobalFlags:
    def test_value_flags_and_values(self) -> None:
        args = ["--session", "s", "open", "x.test", "--proxy", "http://p"]
        assert strip_global_flags(args) == ["open", "x.test"]

    def test_bool_literals(self) -> None:
        assert strip_global_flags(["--json", "false", "back"]) == ["back"]

    def test_bool_flag_keeps_next_token(self) -> None:
        assert strip_global_flags(["--headed", "open", "x.test"]) == ["open", "x.test"]

    def test_config_is_stripped(self) -> None:
        assert strip_global_flags(["--config", "c.json", "reload"]) == ["reload"]

    def test_command_flags_survive(self) -> None:
        assert strip_global_flags(["snapshot", "-i", "-d", "2"]) == ["snapshot", "-i", "-d", "2"]

    def test_short_full_is_stripped(self) -> None:
        assert strip_global_flags(["screenshot", "-f", "out.png"]) == ["screenshot", "out.png"]
