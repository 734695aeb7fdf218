"""Tests for ``get``, ``is`` and ``find``.

Coverage:
* Every ``get`` and ``is`` subcommand and their error paths.
* Semantic locators, ``--name``/``--exact`` placement, and ``nth``
  index validation.
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
# get
# ---------------------------------------------------------------------------

class TestGet:
    @pytest.mark.parametrize(
        ("what", "action"),
        [
            ("text", "gettext"),
            ("html", "innerhtml"),
            ("value", "inputvalue"),
            ("count", "count"),
            ("box", "boundingbox"),
            ("styles", "styles"),
        ],
    )
    def test_selector_queries(self, compile_tokens: Compile, what: str, action: str) -> None:
        assert compile_tokens(["get", what, "#el"]) == {
            "id": FIXED_ID,
            "action": action,
            "selector": "#el",
        }

    def test_attr(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["get", "attr", "a", "href"]) == {
            "id": FIXED_ID,
            "action": "getattribute",
            "selector": "a",
            "attribute": "href",
        }

    @pytest.mark.parametrize("what", ["url", "title"])
    def test_page_queries(self, compile_tokens: Compile, what: str) -> None:
        assert compile_tokens(["get", what]) == {"id": FIXED_ID, "action": what}

    def test_attr_needs_attribute(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["get", "attr", "a"])
        assert exc_info.value.context == "get attr"

    def test_unknown_subcommand_lists_options(self, compile_tokens: Compile) -> None:
        with pytest.raises(UnknownSubcommandError) as exc_info:
            compile_tokens(["get", "colour", "#el"])
        assert exc_info.value.valid_options == (
            "text", "html", "value", "attr", "url", "title", "count", "box", "styles",
        )

    def test_no_subcommand(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["get"])
        assert exc_info.value.context == "get"


# ---------------------------------------------------------------------------
# is
# ---------------------------------------------------------------------------

class TestIs:
    @pytest.mark.parametrize("state", ["visible", "enabled", "checked"])
    def test_states(self, compile_tokens: Compile, state: str) -> None:
        assert compile_tokens(["is", state, "#el"])["action"] == f"is{state}"

    def test_missing_selector(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["is", "visible"])
        assert exc_info.value.context == "is visible"

    def test_unknown_state(self, compile_tokens: Compile) -> None:
        with pytest.raises(UnknownSubcommandError):
            compile_tokens(["is", "hidden", "#el"])


# ---------------------------------------------------------------------------
# find
# ---------------------------------------------------------------------------

class TestFind:
    def test_role_with_name_and_exact(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(
            ["find", "role", "button", "click", "--name", "Submit", "--exact"]
        )
        assert envelope == {
            "id": FIXED_ID,
            "action": "getbyrole",
            "role": "button",
            "subaction": "click",
            "name": "Submit",
            "exact": True,
        }

    def test_role_defaults(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "role", "link"])
        assert envelope["subaction"] == "click"
        assert envelope["name"] is None
        assert envelope["exact"] is False

    def test_flags_before_positionals(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "--exact", "role", "--name", "Go", "button"])
        assert envelope["role"] == "button"
        assert envelope["name"] == "Go"
        assert envelope["exact"] is True

    def test_text(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["find", "text", "Sign in"]) == {
            "id": FIXED_ID,
            "action": "getbytext",
            "text": "Sign in",
            "subaction": "click",
            "exact": False,
        }

    def test_label_fill(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "label", "Email", "fill", "a@b.c"])
        assert envelope == {
            "id": FIXED_ID,
            "action": "getbylabel",
            "label": "Email",
            "subaction": "fill",
            "exact": False,
            "value": "a@b.c",
        }

    def test_placeholder(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "placeholder", "Search", "type", "cats", "and", "dogs"])
        assert envelope["placeholder"] == "Search"
        assert envelope["value"] == "cats and dogs"

    @pytest.mark.parametrize(("locator", "action"), [("alt", "getbyalttext"), ("title", "getbytitle")])
    def test_text_like_locators(self, compile_tokens: Compile, locator: str, action: str) -> None:
        envelope = compile_tokens(["find", locator, "Logo"])
        assert envelope["action"] == action
        assert envelope["text"] == "Logo"

    def test_testid_has_no_exact(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["find", "testid", "submit-btn"]) == {
            "id": FIXED_ID,
            "action": "getbytestid",
            "testId": "submit-btn",
            "subaction": "click",
        }

    def test_first(self, compile_tokens: Compile) -> None:
        assert compile_tokens(["find", "first", ".item"]) == {
            "id": FIXED_ID,
            "action": "nth",
            "selector": ".item",
            "index": 0,
            "subaction": "click",
        }

    def test_last(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "last", ".item", "text"])
        assert envelope["index"] == -1
        assert envelope["subaction"] == "text"

    def test_nth(self, compile_tokens: Compile) -> None:
        envelope = compile_tokens(["find", "nth", "2", ".item", "fill", "hello", "world"])
        assert envelope == {
            "id": FIXED_ID,
            "action": "nth",
            "selector": ".item",
            "index": 2,
            "subaction": "fill",
            "value": "hello world",
        }

    def test_nth_invalid_index(self, compile_tokens: Compile) -> None:
        with pytest.raises(InvalidValueError, match="Invalid index: 'second' is not a valid number"):
            compile_tokens(["find", "nth", "second", ".item"])

    def test_nth_missing_selector(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["find", "nth", "2"])
        assert exc_info.value.context == "find nth"

    def test_unknown_locator(self, compile_tokens: Compile) -> None:
        with pytest.raises(UnknownSubcommandError) as exc_info:
            compile_tokens(["find", "xpath", "//a"])
        assert "nth" in exc_info.value.valid_options
        assert "role" in exc_info.value.valid_options

    def test_locator_missing_value(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError) as exc_info:
            compile_tokens(["find", "role"])
        assert exc_info.value.context == "find role"

    def test_nothing(self, compile_tokens: Compile) -> None:
        with pytest.raises(MissingArgumentsError):
            compile_tokens(["find"])
