"""``diff snapshot|screenshot|url``: change detection between page states.

Unlike most commands, every ``diff`` form is strict: unknown flags and
stray positional tokens are errors rather than being ignored.
"""

from __future__ import annotations

from agent_browser.core.flag_scanner import FlagSpec, scan_flags
from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.exceptions import MissingArgumentsError
from agent_browser.utils.numbers import is_finite_in_range, parse_float, parse_u32

DIFF_SNAPSHOT_USAGE = (
    "diff snapshot [--baseline <file>] [--selector <sel>] [--compact] [--depth <n>]"
)
DIFF_SCREENSHOT_USAGE = (
    "diff screenshot --baseline <file> [--output <file>] [--threshold <0-1>] "
    "[--selector <sel>] [--full]"
)
DIFF_URL_USAGE = (
    "diff url <url1> <url2> [--screenshot] [--full] [--wait-until <strategy>] "
    "[--selector <sel>] [--compact] [--depth <n>]"
)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _depth(token: str) -> int:
    value = parse_u32(token)
    if value is None:
        raise ValueError(f"Depth must be a non-negative integer, got: {token}")
    return value


def _threshold(token: str) -> float:
    value = parse_float(token)
    if value is None:
        raise ValueError(f"Invalid threshold value: {token}")
    if not is_finite_in_range(value, 0.0, 1.0):
        raise ValueError(f"Threshold must be between 0 and 1, got {_format_number(value)}")
    return value


def _selector_flag(usage: str) -> FlagSpec:
    return FlagSpec(("-s", "--selector"), "selector", takes_value=True, usage=usage)


def _depth_flag(usage: str) -> FlagSpec:
    return FlagSpec(("-d", "--depth"), "maxDepth", takes_value=True, convert=_depth, usage=usage)


_COMPACT_FLAG = FlagSpec(("-c", "--compact"), "compact")
_FULL_PAGE_FLAG = FlagSpec(("--full",), "fullPage")

_SNAPSHOT_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(
        ("-b", "--baseline"), "baseline", takes_value=True,
        usage="diff snapshot --baseline <file>",
    ),
    _selector_flag("diff snapshot --selector <sel>"),
    _COMPACT_FLAG,
    _depth_flag("diff snapshot --depth <n>"),
)

_SCREENSHOT_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(
        ("-b", "--baseline"), "baseline", takes_value=True,
        usage="diff screenshot --baseline <file>",
    ),
    FlagSpec(
        ("-o", "--output"), "output", takes_value=True,
        usage="diff screenshot --output <file>",
    ),
    FlagSpec(
        ("-t", "--threshold"), "threshold", takes_value=True, convert=_threshold,
        usage="diff screenshot --threshold <0-1>",
    ),
    _selector_flag("diff screenshot --selector <sel>"),
    _FULL_PAGE_FLAG,
)

_URL_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(("--screenshot",), "screenshot"),
    _FULL_PAGE_FLAG,
    FlagSpec(
        ("--wait-until",), "waitUntil", takes_value=True,
        usage="diff url <url1> <url2> --wait-until <load|domcontentloaded|networkidle>",
    ),
    _selector_flag("diff url <url1> <url2> --selector <sel>"),
    _COMPACT_FLAG,
    _depth_flag("diff url <url1> <url2> --depth <n>"),
)


def _diff_snapshot(ctx: CommandContext) -> ActionEnvelope:
    fields = scan_flags(
        ctx.args, _SNAPSHOT_FLAGS, context="diff snapshot", usage=DIFF_SNAPSHOT_USAGE
    )
    return ctx.envelope("diff_snapshot", **fields)


def _diff_screenshot(ctx: CommandContext) -> ActionEnvelope:
    fields = scan_flags(
        ctx.args, _SCREENSHOT_FLAGS, context="diff screenshot", usage=DIFF_SCREENSHOT_USAGE
    )
    if ctx.options.full:
        fields["fullPage"] = True
    if "baseline" not in fields:
        raise MissingArgumentsError("diff screenshot", "diff screenshot --baseline <file>")
    return ctx.envelope("diff_screenshot", **fields)


def _diff_url(ctx: CommandContext) -> ActionEnvelope:
    url1 = ctx.require(0, "diff url", "diff url <url1> <url2>")
    url2 = ctx.require(1, "diff url", "diff url <url1> <url2>")
    fields = scan_flags(ctx.args[2:], _URL_FLAGS, context="diff url", usage=DIFF_URL_USAGE)
    if ctx.options.full:
        fields["fullPage"] = True
    return ctx.envelope("diff_url", url1=url1, url2=url2, **fields)


_DIFF_SUBCOMMANDS: dict[str, Handler] = {
    "snapshot": _diff_snapshot,
    "screenshot": _diff_screenshot,
    "url": _diff_url,
}


@command("diff")
def _diff(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _DIFF_SUBCOMMANDS,
        context="diff",
        usage="diff <snapshot|screenshot|url>",
    )
