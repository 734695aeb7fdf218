"""Saved browser state: ``state save|load|list|clear|show|clean|rename``.

Commands that take a session name validate it before anything else so
that a name able to escape the state directory never reaches the
daemon.
"""

from __future__ import annotations

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.core.session_names import is_valid_session_name
from agent_browser.exceptions import InvalidSessionNameError, InvalidValueError, MissingArgumentsError
from agent_browser.utils.numbers import parse_i64

STATE_FILE_SUFFIX = ".json"
STATE_CLEAN_USAGE = "state clean --older-than <days>"


def _check_session_name(name: str) -> str:
    if not is_valid_session_name(name):
        raise InvalidSessionNameError(name)
    return name


def _strip_state_suffix(name: str) -> str:
    while name.endswith(STATE_FILE_SUFFIX):
        name = name[: -len(STATE_FILE_SUFFIX)]
    return name


def _state_path(action: str, subcommand: str, placeholder: str, key: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        value = ctx.require(0, f"state {subcommand}", f"state {subcommand} <{placeholder}>")
        return ctx.envelope(action, **{key: value})

    return handler


def _state_clear(ctx: CommandContext) -> ActionEnvelope:
    clear_all = False
    session_name: str | None = None
    for arg in ctx.args:
        if arg in ("--all", "-a"):
            clear_all = True
        elif not arg.startswith("-"):
            session_name = arg

    if session_name is not None:
        _check_session_name(session_name)

    envelope = ctx.envelope("state_clear")
    if clear_all:
        envelope["all"] = True
    if session_name is not None:
        envelope["sessionName"] = session_name
    return envelope


def _state_clean(ctx: CommandContext) -> ActionEnvelope:
    raw_days: str | None = None
    for index, arg in enumerate(ctx.args):
        if arg == "--older-than" and index + 1 < len(ctx.args):
            raw_days = ctx.args[index + 1]

    if raw_days is None:
        raise MissingArgumentsError("state clean", STATE_CLEAN_USAGE)
    days = parse_i64(raw_days)
    if days is None:
        raise InvalidValueError(
            f"Invalid value for --older-than: '{raw_days}' is not a whole number of days",
            STATE_CLEAN_USAGE,
        )
    return ctx.envelope("state_clean", days=days)


def _state_rename(ctx: CommandContext) -> ActionEnvelope:
    usage = "state rename <old-name> <new-name>"
    old_name = _strip_state_suffix(ctx.require(0, "state rename", usage))
    new_name = _strip_state_suffix(ctx.require(1, "state rename", usage))
    _check_session_name(old_name)
    _check_session_name(new_name)
    return ctx.envelope("state_rename", oldName=old_name, newName=new_name)


_STATE_SUBCOMMANDS: dict[str, Handler] = {
    "save": _state_path("state_save", "save", "path", "path"),
    "load": _state_path("state_load", "load", "path", "path"),
    "list": lambda ctx: ctx.envelope("state_list"),
    "clear": _state_clear,
    "show": _state_path("state_show", "show", "filename", "filename"),
    "clean": _state_clean,
    "rename": _state_rename,
}


@command("state")
def _state(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _STATE_SUBCOMMANDS,
        context="state",
        usage="state <save|load|list|clear|show|clean|rename> ...",
    )
