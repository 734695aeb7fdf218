"""Page capture and script evaluation: ``screenshot``, ``pdf``, ``snapshot``, ``eval``."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Sequence

from agent_browser.core.flag_scanner import FlagSpec, scan_flags
from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, command
from agent_browser.exceptions import InvalidValueError
from agent_browser.utils.numbers import parse_i32

_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")
_RELATIVE_PREFIXES = ("./", "../")
_SELECTOR_PREFIXES = (".", "#", "@")

EVAL_BASE64_USAGE = "eval -b <base64-encoded-script>"


# ---------------------------------------------------------------------------
# screenshot / pdf
# ---------------------------------------------------------------------------

def split_screenshot_target(args: Sequence[str]) -> tuple[str | None, str | None]:
    """Decide which of the screenshot arguments is a selector and which a path.

    Two arguments are always ``(selector, path)``.  A single argument is
    a path when it is relative (``./``, ``../``), contains ``/`` or has an
    image extension, unless it starts like a selector (``.``, ``#``,
    ``@``); a relative path always wins over the selector check.

    Returns
    -------
    tuple[str | None, str | None]
        ``(selector, path)``.
    """
    if len(args) >= 2:
        return args[0], args[1]
    if not args:
        return None, None

    token = args[0]
    is_relative = token.startswith(_RELATIVE_PREFIXES)
    looks_like_selector = not is_relative and token.startswith(_SELECTOR_PREFIXES)
    looks_like_path = is_relative or "/" in token or token.endswith(_IMAGE_EXTENSIONS)
    if looks_like_selector or not looks_like_path:
        return token, None
    return None, token


@command("screenshot")
def _screenshot(ctx: CommandContext) -> ActionEnvelope:
    selector, path = split_screenshot_target(ctx.args)
    return ctx.envelope(
        "screenshot",
        path=path,
        selector=selector,
        fullPage=ctx.options.full,
        annotate=ctx.options.annotate,
    )


@command("pdf")
def _pdf(ctx: CommandContext) -> ActionEnvelope:
    path = ctx.require(0, "pdf", "pdf <path>")
    return ctx.envelope("pdf", path=path)


# ---------------------------------------------------------------------------
# snapshot
# ---------------------------------------------------------------------------

def _depth(token: str) -> int:
    value = parse_i32(token)
    if value is None:
        raise ValueError(f"Invalid depth: {token}")
    return value


_SNAPSHOT_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(("-i", "--interactive"), "interactive"),
    FlagSpec(("-c", "--compact"), "compact"),
    FlagSpec(("-C", "--cursor"), "cursor"),
    FlagSpec(("-d", "--depth"), "maxDepth", takes_value=True, convert=_depth),
    FlagSpec(("-s", "--selector"), "selector", takes_value=True),
)


@command("snapshot")
def _snapshot(ctx: CommandContext) -> ActionEnvelope:
    fields = scan_flags(
        ctx.args,
        _SNAPSHOT_FLAGS,
        context="snapshot",
        usage="snapshot [-i] [-c] [-C] [-d <depth>] [-s <selector>]",
        strict=False,
    )
    return ctx.envelope("snapshot", **fields)


# ---------------------------------------------------------------------------
# eval
# ---------------------------------------------------------------------------

def decode_base64_script(encoded: str) -> str:
    """Decode a ``-b`` script argument.

    Raises
    ------
    InvalidValueError
        When *encoded* is not canonical base64 or does not decode to UTF-8.
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidValueError("Invalid base64 encoding", EVAL_BASE64_USAGE) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidValueError("Base64 decoded to invalid UTF-8", EVAL_BASE64_USAGE) from exc


@command("eval")
def _eval(ctx: CommandContext) -> ActionEnvelope:
    first = ctx.arg(0)
    if first in ("-b", "--base64"):
        script = decode_base64_script(ctx.joined(1))
    elif first == "--stdin":
        script = "\n".join(ctx.read_stdin())
    else:
        script = ctx.joined(0)
    return ctx.envelope("evaluate", script=script)
