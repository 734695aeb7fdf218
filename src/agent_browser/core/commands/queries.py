"""Read-only element queries: ``get``, ``is`` and semantic ``find`` locators."""

from __future__ import annotations

from dataclasses import dataclass, replace

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.exceptions import UnknownSubcommandError
from agent_browser.utils.numbers import parse_i32

DEFAULT_SUBACTION = "click"


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------

def _get_selector(subcommand: str, action: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        selector = ctx.require(0, f"get {subcommand}", f"get {subcommand} <selector>")
        return ctx.envelope(action, selector=selector)

    return handler


def _get_attr(ctx: CommandContext) -> ActionEnvelope:
    usage = "get attr <selector> <attribute>"
    selector = ctx.require(0, "get attr", usage)
    attribute = ctx.require(1, "get attr", usage)
    return ctx.envelope("getattribute", selector=selector, attribute=attribute)


_GET_SUBCOMMANDS: dict[str, Handler] = {
    "text": _get_selector("text", "gettext"),
    "html": _get_selector("html", "innerhtml"),
    "value": _get_selector("value", "inputvalue"),
    "attr": _get_attr,
    "url": lambda ctx: ctx.envelope("url"),
    "title": lambda ctx: ctx.envelope("title"),
    "count": _get_selector("count", "count"),
    "box": _get_selector("box", "boundingbox"),
    "styles": _get_selector("styles", "styles"),
}


@command("get")
def _get(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _GET_SUBCOMMANDS,
        context="get",
        usage="get <text|html|value|attr|url|title|count|box|styles> [args...]",
    )


# ---------------------------------------------------------------------------
# is
# ---------------------------------------------------------------------------

def _is_state(state: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        selector = ctx.require(0, f"is {state}", f"is {state} <selector>")
        return ctx.envelope(f"is{state}", selector=selector)

    return handler


_IS_SUBCOMMANDS: dict[str, Handler] = {
    state: _is_state(state) for state in ("visible", "enabled", "checked")
}


@command("is")
def _is(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _IS_SUBCOMMANDS,
        context="is",
        usage="is <visible|enabled|checked> <selector>",
    )


# ---------------------------------------------------------------------------
# find
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _Locator:
    """How one ``find`` locator maps onto an envelope."""

    action: str
    value_key: str
    usage: str
    exact: bool = False
    """Whether ``exact`` is sent."""

    fill: bool = False
    """Whether trailing text becomes the ``value`` field."""

    name: bool = False
    """Whether ``--name`` is sent (``null`` when absent)."""

    index: int | None = None


_LOCATORS: dict[str, _Locator] = {
    "role": _Locator(
        "getbyrole", "role",
        "find role <role> [action] [--name <name>] [--exact]",
        exact=True, fill=True, name=True,
    ),
    "text": _Locator("getbytext", "text", "find text <text> [action] [--exact]", exact=True),
    "label": _Locator(
        "getbylabel", "label", "find label <label> [action] [text] [--exact]",
        exact=True, fill=True,
    ),
    "placeholder": _Locator(
        "getbyplaceholder", "placeholder",
        "find placeholder <text> [action] [text] [--exact]",
        exact=True, fill=True,
    ),
    "alt": _Locator("getbyalttext", "text", "find alt <text> [action] [--exact]", exact=True),
    "title": _Locator("getbytitle", "text", "find title <text> [action] [--exact]", exact=True),
    "testid": _Locator("getbytestid", "testId", "find testid <id> [action] [text]", fill=True),
    "first": _Locator("nth", "selector", "find first <selector> [action] [text]", fill=True, index=0),
    "last": _Locator("nth", "selector", "find last <selector> [action] [text]", fill=True, index=-1),
}
_FIND_LOCATORS: tuple[str, ...] = (*_LOCATORS, "nth")
FIND_USAGE = "find <locator> <value> [action] [text]"
FIND_NTH_USAGE = "find nth <index> <selector> [action] [text]"


def _split_find_options(args: tuple[str, ...]) -> tuple[list[str], str | None, bool]:
    """Separate ``--name <value>`` and ``--exact`` from positional tokens."""
    positional: list[str] = []
    name: str | None = None
    exact = False
    i = 0
    while i < len(args):
        token = args[i]
        if token == "--exact":
            exact = True
        elif token == "--name":
            if i + 1 < len(args):
                name = args[i + 1]
                i += 1
        else:
            positional.append(token)
        i += 1
    return positional, name, exact


def _find_nth(ctx: CommandContext) -> ActionEnvelope:
    index = ctx.require_number(1, parse_i32, "find nth", FIND_NTH_USAGE, label="index")
    selector = ctx.require(2, "find nth", FIND_NTH_USAGE)
    envelope = ctx.envelope(
        "nth",
        selector=selector,
        index=index,
        subaction=ctx.arg(3, DEFAULT_SUBACTION),
    )
    if len(ctx.args) > 4:
        envelope["value"] = ctx.joined(4)
    return envelope


@command("find")
def _find(ctx: CommandContext) -> ActionEnvelope:
    positional, name, exact = _split_find_options(ctx.args)
    ctx = replace(ctx, args=tuple(positional))
    locator_name = ctx.require(0, "find", FIND_USAGE)
    if locator_name == "nth":
        return _find_nth(ctx)

    locator = _LOCATORS.get(locator_name)
    if locator is None:
        raise UnknownSubcommandError(locator_name, _FIND_LOCATORS)

    value = ctx.require(1, f"find {locator_name}", locator.usage)
    envelope = ctx.envelope(locator.action, **{locator.value_key: value})
    if locator.index is not None:
        envelope["index"] = locator.index
    envelope["subaction"] = ctx.arg(2, DEFAULT_SUBACTION)
    if locator.name:
        envelope["name"] = name
    if locator.exact:
        envelope["exact"] = exact
    if locator.fill and len(ctx.args) > 3:
        envelope["value"] = ctx.joined(3)
    return envelope
