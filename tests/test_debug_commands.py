"""Tests for debugging commands and the strict ``diff`` family.

Coverage:
* ``console``/``errors``, ``trace``, ``profiler`` and ``record``.
* ``diff snapshot|screenshot|url`` flag tables, converter errors and
  the required baseline.
"""

from __future__ import annotations

import pytest

from agent_browser.exceptions import (
    InvalidValueError,
    MissingArgumentsError,
    UnknownSubcommandError,
)
from tests.conftest import FIXED_ID, Compile


# ---------------------------------------------------------------------------
# Logs, tracing, profiling
# ---------------------------------------------------------------------------

class TestLogs:
    @pytest.mark.parametrize("verb", ["console", "errors"])
    def test_read(self, compile_tokens: Compile, verb: str) -> None:
        assert compile_tokens([verb]) == {"id": FIXED_ID, "action": verb, "clear": False}

    @pytest.mark.parametrize("verb", ["console", "errors"])
    def test_clear(self, compile_tokens: Compile, verb: str) -> None:
        assert compile_tokens([verb, "--clear"])["clear"] is True


class TestTraceAndProfiler:
    def test_trace_start(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["trace", "start"]) == {"id": FIXED_ID, "action": "trace_start"}

    def test_trace_stop_with_path(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["trace", "stop", "trace.zip"])["path"] == "trace.zip"

    def test_trace_stop_without_path(self, compile_tokens: Compile) -> None:
        assert "path" not in compile_tokens(["trace", "stop"])

    def test_profiler_categories(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["profiler", "start", "--categories", "v8,devtools.timeline"])
        assert envelope["categories"] == ["v8", "devtools.timeline"]

    def test_profiler_categories_need_value(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError):
            compile_tokens(["profiler", "start", "--categories"])

    def test_profiler_stop(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["profiler", "stop", "p.json"]) == {
            "id": FIXED_ID,
            "action": "profiler_stop",
            "path": "p.json",
        }


class TestRecord:
    def test_start_adds_scheme(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["record", "start", "out.webm", "example.com"]) == {
            "id": FIXED_ID,
            "action": "recording_start",
            "path": "out.webm",
            "url": "https://example.com",
        }

    def test_start_keeps_http(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["record", "start", "out.webm", "http://localhost:3000"])
        assert envelope["url"] == "http://localhost:3000"

    def test_restart_needs_path(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["record", "restart"])
        assert exc_info.value.context == "record restart"

    def test_stop(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["record", "stop"]) == {"id": FIXED_ID, "action": "recording_stop"}


# ---------------------------------------------------------------------------
# diff
# ---------------------------------------------------------------------------

class TestDiffSnapshot:
    def test_bare(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["diff", "snapshot"]) == {"id": FIXED_ID, "action": "diff_snapshot"}

    def test_flags(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(
            ["diff", "snapshot", "-b", "before.txt", "--selector", "#main", "-c", "-d", "4"]
        )
        assert envelope == {
            "id": FIXED_ID,
            "action": "diff_snapshot",
            "baseline": "before.txt",
            "selector": "#main",
            "compact": True,
            "maxDepth": 4,
        }

    def test_negative_depth(self, compile_tokens: Compile) -> None:
        with pytest.raises(InvalidValueError, match="Depth must be a non-negative integer, got: -1"):
            compile_tokens(["diff", "snapshot", "--depth", "-1"])

    def test_unknown_flag(self, compile_tokens: Compile) -> None:
        with pytest.raises(InvalidValueError, match="Unknown flag: --interactive"):
            compile_tokens(["diff", "snapshot", "--interactive"])

    def test_stray_token(self, compile_tokens: Compile) -> None:
        with pytest.raises(InvalidValueError, match="Unexpected argument: now"):
            compile_tokens(["diff", "snapshot", "now"])

    def test_flag_without_value(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["diff", "snapshot", "--baseline"])
        assert exc_info.value.context == "diff snapshot --baseline"
        assert exc_info.value.usage == "diff snapshot --baseline <file>"


class TestDiffScreenshot:
    def test_baseline_and_threshold(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(
            ["diff", "screenshot", "--baseline", "b.png", "-o", "d.png", "-t", "0.2"]
        )
        assert envelope == {
            "id": FIXED_ID,
            "action": "diff_screenshot",
            "baseline": "b.png",
            "output": "d.png",
            "threshold": 0.2,
        }

    def test_baseline_is_required(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["diff", "screenshot", "-t", "0.1"])
        assert exc_info.value.context == "diff screenshot"
        assert exc_info.value.usage == "diff screenshot --baseline <file>"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("1.5", "Threshold must be between 0 and 1, got 1.5"),
            ("2", "Threshold must be between 0 and 1, got 2"),
            ("-0.1", "Threshold must be between 0 and 1, got -0.1"),
            ("nan", "Threshold must be between 0 and 1"),
            ("high", "Invalid threshold value: high"),
        ],
    )
    def test_invalid_threshold(self, compile_tokens: Compile, value: str, message: str) -> None:
        with pytest.raises(InvalidValueError) as exc_info:
            compile_tokens(["diff", "screenshot", "-b", "b.png", "-t", value])
        assert str(exc_info.value).startswith(message)

    @pytest.mark.parametrize("value", ["0", "1"])
    def test_threshold_bounds_are_inclusive(self, compile_tokens: Compile, value: str) -> None:
        envelope = compile_tokens(["diff", "screenshot", "-b", "b.png", "-t", value])
        assert envelope["threshold"] == float(value)

    def test_global_full_sets_full_page(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["diff", "screenshot", "-b", "b.png"], full=True)
        assert envelope["fullPage"] is True

    def test_local_full_flag(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["diff", "screenshot", "-b", "b.png", "--full"])
        assert envelope["fullPage"] is True


class TestDiffUrl:
    def test_urls_and_flags(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(
            ["diff", "url", "https://a.test", "https://b.test", "--screenshot",
             "--wait-until", "networkidle"]
        )
        assert envelope == {
            "id": FIXED_ID,
            "action": "diff_url",
            "url1": "https://a.test",
            "url2": "https://b.test",
            "screenshot": True,
            "waitUntil": "networkidle",
        }

    def test_needs_two_urls(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["diff", "url", "https://a.test"])
        assert exc_info.value.context == "diff url"

    def test_unknown_kind(self, compile_tokens: Compile) -> None:
        with pytest.raises(UnknownSubcommandError) as exc_info:
            compile_tokens(["diff", "pdf"])
        assert exc_info.value.valid_options == ("snapshot", "screenshot", "url")

    def test_missing_kind(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["diff"])
        assert exc_info.value.usage == "diff <snapshot|screenshot|url>"
