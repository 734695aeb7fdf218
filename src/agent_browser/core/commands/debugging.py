"""Debugging aids: console/error logs, tracing, profiling and video recording."""

from __future__ import annotations

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.exceptions import MissingArgumentsError


def _log_reader(action: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        return ctx.envelope(action, clear="--clear" in ctx.args)

    return handler


command("console")(_log_reader("console"))
command("errors")(_log_reader("errors"))


def _stop_with_optional_path(action: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        envelope = ctx.envelope(action)
        path = ctx.arg(0)
        if path is not None:
            envelope["path"] = path
        return envelope

    return handler


# ---------------------------------------------------------------------------
# trace / profiler
# ---------------------------------------------------------------------------

@command("trace")
def _trace(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        {
            "start": lambda ctx: ctx.envelope("trace_start"),
            "stop": _stop_with_optional_path("trace_stop"),
        },
        context="trace",
        usage="trace <start|stop> [path]",
    )


def _profiler_start(ctx: CommandContext) -> ActionEnvelope:
    envelope = ctx.envelope("profiler_start")
    if "--categories" in ctx.args:
        index = ctx.args.index("--categories")
        if index + 1 >= len(ctx.args):
            raise MissingArgumentsError(
                "profiler start --categories",
                "profiler start --categories <list>",
            )
        envelope["categories"] = ctx.args[index + 1].split(",")
    return envelope


@command("profiler")
def _profiler(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        {
            "start": _profiler_start,
            "stop": _stop_with_optional_path("profiler_stop"),
        },
        context="profiler",
        usage="profiler <start|stop> [options]",
    )


# ---------------------------------------------------------------------------
# record
# ---------------------------------------------------------------------------

def _recording(action: str, subcommand: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        path = ctx.require(0, f"record {subcommand}", f"record {subcommand} <output.webm> [url]")
        envelope = ctx.envelope(action, path=path)
        url = ctx.arg(1)
        if url is not None:
            envelope["url"] = url if url.startswith("http") else f"https://{url}"
        return envelope

    return handler


_RECORD_SUBCOMMANDS: dict[str, Handler] = {
    "start": _recording("recording_start", "start"),
    "stop": lambda ctx: ctx.envelope("recording_stop"),
    "restart": _recording("recording_restart", "restart"),
}


@command("record")
def _record(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _RECORD_SUBCOMMANDS,
        context="record",
        usage="record <start|stop|restart> [path] [url]",
    )
