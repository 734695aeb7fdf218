"""Element, keyboard and scroll interaction commands."""

from __future__ import annotations

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command
from agent_browser.exceptions import InvalidValueError, MissingArgumentsError
from agent_browser.utils.numbers import parse_i32, parse_u32

DEFAULT_SCROLL_DIRECTION = "down"
DEFAULT_SCROLL_AMOUNT = 300
SWIPE_DIRECTIONS = ("up", "down", "left", "right")
SWIPE_USAGE = "swipe <up|down|left|right> [distance]"


# ---------------------------------------------------------------------------
# Single-selector commands
# ---------------------------------------------------------------------------

def _selector_only(action: str) -> Handler:
    usage = f"{action} <selector>"

    def handler(ctx: CommandContext) -> ActionEnvelope:
        selector = ctx.require(0, action, usage)
        return ctx.envelope(action, selector=selector)

    return handler


for _action in ("dblclick", "hover", "focus", "check", "uncheck", "highlight", "tap"):
    command(_action)(_selector_only(_action))
command("scrollintoview", "scrollinto")(_selector_only("scrollintoview"))


@command("click")
def _click(ctx: CommandContext) -> ActionEnvelope:
    new_tab = "--new-tab" in ctx.args
    selector = next((arg for arg in ctx.args if arg != "--new-tab"), None)
    if selector is None:
        raise MissingArgumentsError("click", "click <selector> [--new-tab]")
    envelope = ctx.envelope("click", selector=selector)
    if new_tab:
        envelope["newTab"] = True
    return envelope


# ---------------------------------------------------------------------------
# Text entry and form controls
# ---------------------------------------------------------------------------

@command("fill")
def _fill(ctx: CommandContext) -> ActionEnvelope:
    selector = ctx.require(0, "fill", "fill <selector> <text>")
    return ctx.envelope("fill", selector=selector, value=ctx.joined(1))


@command("type")
def _type(ctx: CommandContext) -> ActionEnvelope:
    selector = ctx.require(0, "type", "type <selector> <text>")
    return ctx.envelope("type", selector=selector, text=ctx.joined(1))


@command("select")
def _select(ctx: CommandContext) -> ActionEnvelope:
    usage = "select <selector> <value...>"
    selector = ctx.require(0, "select", usage)
    ctx.require(1, "select", usage)
    values = list(ctx.args[1:])
    return ctx.envelope(
        "select",
        selector=selector,
        values=values[0] if len(values) == 1 else values,
    )


@command("drag")
def _drag(ctx: CommandContext) -> ActionEnvelope:
    usage = "drag <source> <target>"
    source = ctx.require(0, "drag", usage)
    target = ctx.require(1, "drag", usage)
    return ctx.envelope("drag", source=source, target=target)


@command("upload")
def _upload(ctx: CommandContext) -> ActionEnvelope:
    selector = ctx.require(0, "upload", "upload <selector> <files...>")
    return ctx.envelope("upload", selector=selector, files=list(ctx.args[1:]))


@command("download")
def _download(ctx: CommandContext) -> ActionEnvelope:
    usage = "download <selector> <path>"
    selector = ctx.require(0, "download", usage)
    path = ctx.require(1, "download", usage)
    return ctx.envelope("download", selector=selector, path=path)


# ---------------------------------------------------------------------------
# Keyboard
# ---------------------------------------------------------------------------

@command("press", "key")
def _press(ctx: CommandContext) -> ActionEnvelope:
    key = ctx.require(0, "press", "press <key>")
    return ctx.envelope("press", key=key)


def _key_transition(action: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        key = ctx.require(0, action, f"{action} <key>")
        return ctx.envelope(action, key=key)

    return handler


command("keydown")(_key_transition("keydown"))
command("keyup")(_key_transition("keyup"))


# ---------------------------------------------------------------------------
# Scrolling and touch
# ---------------------------------------------------------------------------

@command("scroll")
def _scroll(ctx: CommandContext) -> ActionEnvelope:
    direction = ctx.arg(0, DEFAULT_SCROLL_DIRECTION)
    amount = parse_i32(ctx.arg(1, ""))
    if amount is None:
        amount = DEFAULT_SCROLL_AMOUNT
    return ctx.envelope("scroll", direction=direction, amount=amount)


@command("swipe")
def _swipe(ctx: CommandContext) -> ActionEnvelope:
    direction = ctx.require(0, "swipe", SWIPE_USAGE)
    if direction not in SWIPE_DIRECTIONS:
        raise InvalidValueError(f"Invalid swipe direction: {direction}", SWIPE_USAGE)
    envelope = ctx.envelope("swipe", direction=direction)
    distance = parse_u32(ctx.arg(1, ""))
    if distance is not None:
        envelope["distance"] = distance
    return envelope
