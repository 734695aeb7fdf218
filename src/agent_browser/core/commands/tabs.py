"""Tab, window, frame, dialog and mobile-device commands."""

from __future__ import annotations

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.exceptions import UnknownSubcommandError
from agent_browser.utils.numbers import parse_i32

TAB_OPTIONS = ("new", "list", "close", "<index>")


# ---------------------------------------------------------------------------
# tab
# ---------------------------------------------------------------------------

@command("tab")
def _tab(ctx: CommandContext) -> ActionEnvelope:
    subcommand = ctx.arg(0)
    if subcommand is None or subcommand == "list":
        return ctx.envelope("tab_list")

    if subcommand == "new":
        envelope = ctx.envelope("tab_new")
        url = ctx.arg(1)
        if url is not None:
            envelope["url"] = url
        return envelope

    if subcommand == "close":
        envelope = ctx.envelope("tab_close")
        index = parse_i32(ctx.arg(1, ""))
        if index is not None:
            envelope["index"] = index
        return envelope

    index = parse_i32(subcommand)
    if index is None:
        raise UnknownSubcommandError(subcommand, TAB_OPTIONS)
    return ctx.envelope("tab_switch", index=index)


# ---------------------------------------------------------------------------
# window / frame
# ---------------------------------------------------------------------------

@command("window")
def _window(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        {"new": lambda ctx: ctx.envelope("window_new")},
        context="window",
        usage="window <new>",
    )


@command("frame")
def _frame(ctx: CommandContext) -> ActionEnvelope:
    selector = ctx.require(0, "frame", "frame <selector|main>")
    if selector == "main":
        return ctx.envelope("mainframe")
    return ctx.envelope("frame", selector=selector)


# ---------------------------------------------------------------------------
# dialog
# ---------------------------------------------------------------------------

def _dialog_accept(ctx: CommandContext) -> ActionEnvelope:
    envelope = ctx.envelope("dialog", response="accept")
    prompt_text = ctx.arg(0)
    if prompt_text is not None:
        envelope["promptText"] = prompt_text
    return envelope


_DIALOG_SUBCOMMANDS: dict[str, Handler] = {
    "accept": _dialog_accept,
    "dismiss": lambda ctx: ctx.envelope("dialog", response="dismiss"),
}


@command("dialog")
def _dialog(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _DIALOG_SUBCOMMANDS,
        context="dialog",
        usage="dialog <accept|dismiss> [text]",
    )


# ---------------------------------------------------------------------------
# device (iOS simulators)
# ---------------------------------------------------------------------------

@command("device")
def _device(ctx: CommandContext) -> ActionEnvelope:
    if not ctx.args:
        return ctx.envelope("device_list")
    return dispatch_subcommand(
        ctx,
        {"list": lambda ctx: ctx.envelope("device_list")},
        context="device",
        usage="device [list]",
    )
