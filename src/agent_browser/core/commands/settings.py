"""Browser-context commands: ``set``, ``mouse``, ``network``, ``storage``, ``cookies``."""

from __future__ import annotations

import json

from agent_browser.core.flag_scanner import FlagSpec, scan_flags
from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command, dispatch_subcommand
from agent_browser.exceptions import InvalidValueError, MissingArgumentsError, UnknownSubcommandError
from agent_browser.utils.numbers import parse_float, parse_i32, parse_i64

# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------

SET_HEADERS_USAGE = "set headers <json> (must be valid JSON object)"


def _set_viewport(ctx: CommandContext) -> ActionEnvelope:
    usage = "set viewport <width> <height>"
    ctx.require(1, "set viewport", usage)
    width = ctx.require_number(0, parse_i32, "set viewport", usage, label="width")
    height = ctx.require_number(1, parse_i32, "set viewport", usage, label="height")
    return ctx.envelope("viewport", width=width, height=height)


def _set_device(ctx: CommandContext) -> ActionEnvelope:
    device = ctx.require(0, "set device", "set device <name>")
    return ctx.envelope("device", device=device)


def _set_geolocation(ctx: CommandContext) -> ActionEnvelope:
    usage = "set geo <latitude> <longitude>"
    ctx.require(1, "set geo", usage)
    latitude = ctx.require_number(0, parse_float, "set geo", usage, label="latitude")
    longitude = ctx.require_number(1, parse_float, "set geo", usage, label="longitude")
    return ctx.envelope("geolocation", latitude=latitude, longitude=longitude)


def _set_offline(ctx: CommandContext) -> ActionEnvelope:
    return ctx.envelope("offline", offline=ctx.arg(0) not in ("off", "false"))


def _set_headers(ctx: CommandContext) -> ActionEnvelope:
    raw = ctx.require(0, "set headers", "set headers <json>")
    try:
        headers = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidValueError(f"Invalid JSON for headers: {raw}", SET_HEADERS_USAGE) from exc
    if not isinstance(headers, dict):
        raise InvalidValueError(f"Headers must be a JSON object: {raw}", SET_HEADERS_USAGE)
    return ctx.envelope("headers", headers=headers)


def _set_credentials(ctx: CommandContext) -> ActionEnvelope:
    usage = "set credentials <username> <password>"
    username = ctx.require(0, "set credentials", usage)
    password = ctx.require(1, "set credentials", usage)
    return ctx.envelope("credentials", username=username, password=password)


def _set_media(ctx: CommandContext) -> ActionEnvelope:
    if "dark" in ctx.args:
        color_scheme = "dark"
    elif "light" in ctx.args:
        color_scheme = "light"
    else:
        color_scheme = "no-preference"
    reduced_motion = "reduce" if "reduced-motion" in ctx.args else "no-preference"
    return ctx.envelope("emulatemedia", colorScheme=color_scheme, reducedMotion=reduced_motion)


_SET_SUBCOMMANDS: dict[str, Handler] = {
    "viewport": _set_viewport,
    "device": _set_device,
    "geo": _set_geolocation,
    "geolocation": _set_geolocation,
    "offline": _set_offline,
    "headers": _set_headers,
    "credentials": _set_credentials,
    "auth": _set_credentials,
    "media": _set_media,
}


@command("set")
def _set(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _SET_SUBCOMMANDS,
        context="set",
        usage="set <viewport|device|geo|offline|headers|credentials|media> [args...]",
    )


# ---------------------------------------------------------------------------
# mouse
# ---------------------------------------------------------------------------

DEFAULT_MOUSE_BUTTON = "left"
DEFAULT_WHEEL_DELTA_Y = 100


def _mouse_move(ctx: CommandContext) -> ActionEnvelope:
    usage = "mouse move <x> <y>"
    ctx.require(1, "mouse move", usage)
    x = ctx.require_number(0, parse_i32, "mouse move", usage, label="x coordinate")
    y = ctx.require_number(1, parse_i32, "mouse move", usage, label="y coordinate")
    return ctx.envelope("mousemove", x=x, y=y)


def _mouse_wheel(ctx: CommandContext) -> ActionEnvelope:
    delta_y = parse_i32(ctx.arg(0, ""))
    delta_x = parse_i32(ctx.arg(1, ""))
    return ctx.envelope(
        "wheel",
        deltaX=0 if delta_x is None else delta_x,
        deltaY=DEFAULT_WHEEL_DELTA_Y if delta_y is None else delta_y,
    )


_MOUSE_SUBCOMMANDS: dict[str, Handler] = {
    "move": _mouse_move,
    "down": lambda ctx: ctx.envelope("mousedown", button=ctx.arg(0, DEFAULT_MOUSE_BUTTON)),
    "up": lambda ctx: ctx.envelope("mouseup", button=ctx.arg(0, DEFAULT_MOUSE_BUTTON)),
    "wheel": _mouse_wheel,
}


@command("mouse")
def _mouse(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _MOUSE_SUBCOMMANDS,
        context="mouse",
        usage="mouse <move|down|up|wheel> [args...]",
    )


# ---------------------------------------------------------------------------
# network
# ---------------------------------------------------------------------------

def _value_after(args: tuple[str, ...], flag: str) -> str | None:
    if flag not in args:
        return None
    index = args.index(flag)
    return args[index + 1] if index + 1 < len(args) else None


def _network_route(ctx: CommandContext) -> ActionEnvelope:
    url = ctx.require(0, "network route", "network route <url> [--abort|--body <json>]")
    return ctx.envelope(
        "route",
        url=url,
        abort="--abort" in ctx.args,
        body=_value_after(ctx.args, "--body"),
    )


def _network_unroute(ctx: CommandContext) -> ActionEnvelope:
    envelope = ctx.envelope("unroute")
    url = ctx.arg(0)
    if url is not None:
        envelope["url"] = url
    return envelope


def _network_requests(ctx: CommandContext) -> ActionEnvelope:
    envelope = ctx.envelope("requests", clear="--clear" in ctx.args)
    request_filter = _value_after(ctx.args, "--filter")
    if request_filter is not None:
        envelope["filter"] = request_filter
    return envelope


_NETWORK_SUBCOMMANDS: dict[str, Handler] = {
    "route": _network_route,
    "unroute": _network_unroute,
    "requests": _network_requests,
}


@command("network")
def _network(ctx: CommandContext) -> ActionEnvelope:
    return dispatch_subcommand(
        ctx,
        _NETWORK_SUBCOMMANDS,
        context="network",
        usage="network <route|unroute|requests> [args...]",
    )


# ---------------------------------------------------------------------------
# storage
# ---------------------------------------------------------------------------

STORAGE_TYPES = ("local", "session")


@command("storage")
def _storage(ctx: CommandContext) -> ActionEnvelope:
    storage_type = ctx.arg(0)
    if storage_type is None:
        raise MissingArgumentsError(
            "storage",
            "storage <local|session> [get|set|clear] [key] [value]",
        )
    if storage_type not in STORAGE_TYPES:
        raise UnknownSubcommandError(storage_type, STORAGE_TYPES)

    operation = ctx.arg(1, "get")
    if operation == "set":
        context = f"storage {storage_type} set"
        usage = "storage <local|session> set <key> <value>"
        key = ctx.require(2, context, usage)
        value = ctx.require(3, context, usage)
        return ctx.envelope("storage_set", type=storage_type, key=key, value=value)
    if operation == "clear":
        return ctx.envelope("storage_clear", type=storage_type)

    envelope = ctx.envelope("storage_get", type=storage_type)
    key = ctx.arg(2)
    if key is not None:
        envelope["key"] = key
    return envelope


# ---------------------------------------------------------------------------
# cookies
# ---------------------------------------------------------------------------

COOKIE_SET_USAGE = (
    "cookies set <name> <value> [--url <url>] [--domain <domain>] [--path <path>] "
    "[--httpOnly] [--secure] [--sameSite <Strict|Lax|None>] [--expires <timestamp>]"
)
SAME_SITE_VALUES = ("Strict", "Lax", "None")


def _same_site(token: str) -> str:
    if token not in SAME_SITE_VALUES:
        raise ValueError(f"Invalid --sameSite value: {token} (expected Strict, Lax or None)")
    return token


def _expires(token: str) -> int:
    value = parse_i64(token)
    if value is None:
        raise ValueError(f"Invalid --expires value: {token} (expected a Unix timestamp)")
    return value


_COOKIE_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(
        ("--url",), "url", takes_value=True,
        usage="cookies set <name> <value> --url <url>",
    ),
    FlagSpec(
        ("--domain",), "domain", takes_value=True,
        usage="cookies set <name> <value> --domain <domain>",
    ),
    FlagSpec(
        ("--path",), "path", takes_value=True,
        usage="cookies set <name> <value> --path <path>",
    ),
    FlagSpec(("--httpOnly",), "httpOnly"),
    FlagSpec(("--secure",), "secure"),
    FlagSpec(
        ("--sameSite",), "sameSite", takes_value=True, convert=_same_site,
        usage="cookies set <name> <value> --sameSite <Strict|Lax|None>",
    ),
    FlagSpec(
        ("--expires",), "expires", takes_value=True, convert=_expires,
        usage="cookies set <name> <value> --expires <timestamp>",
    ),
)


def _cookies_set(ctx: CommandContext) -> ActionEnvelope:
    name = ctx.require(0, "cookies set", COOKIE_SET_USAGE)
    value = ctx.require(1, "cookies set", COOKIE_SET_USAGE)
    cookie = {"name": name, "value": value}
    cookie.update(
        scan_flags(ctx.args[2:], _COOKIE_FLAGS, context="cookies set", usage=COOKIE_SET_USAGE)
    )
    return ctx.envelope("cookies_set", cookies=[cookie])


_COOKIE_SUBCOMMANDS: dict[str, Handler] = {
    "get": lambda ctx: ctx.envelope("cookies_get"),
    "set": _cookies_set,
    "clear": lambda ctx: ctx.envelope("cookies_clear"),
}


@command("cookies")
def _cookies(ctx: CommandContext) -> ActionEnvelope:
    if not ctx.args:
        return ctx.envelope("cookies_get")
    return dispatch_subcommand(
        ctx,
        _COOKIE_SUBCOMMANDS,
        context="cookies",
        usage="cookies [get|set|clear]",
    )
