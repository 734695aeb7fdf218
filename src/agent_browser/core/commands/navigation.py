"""Navigation and connection commands: ``open``, history, ``close``, ``connect``."""

from __future__ import annotations

import json

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, Handler, command
from agent_browser.exceptions import InvalidValueError
from agent_browser.utils.numbers import parse_u32

_PASSTHROUGH_PREFIXES = ("http://", "https://", "about:", "data:", "file:")
_CDP_URL_PREFIXES = ("ws://", "wss://", "http://", "https://")

OPEN_USAGE = "open <url>"
OPEN_HEADERS_USAGE = "open <url> --headers '{\"Key\": \"Value\"}'"
CONNECT_USAGE = "connect <port|url>"
MAX_PORT = 65535


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless *url* already names a supported scheme.

    The scheme check is case-insensitive; the URL itself is returned
    unchanged.
    """
    if url.lower().startswith(_PASSTHROUGH_PREFIXES):
        return url
    return f"https://{url}"


@command("open", "goto", "navigate")
def _open(ctx: CommandContext) -> ActionEnvelope:
    url = ctx.require(0, ctx.verb, OPEN_USAGE)
    envelope = ctx.envelope("navigate", url=normalize_url(url))

    raw_headers = ctx.options.headers
    if raw_headers is not None:
        try:
            envelope["headers"] = json.loads(raw_headers)
        except json.JSONDecodeError as exc:
            raise InvalidValueError(
                f"Invalid JSON for --headers: {raw_headers}",
                OPEN_HEADERS_USAGE,
            ) from exc

    # The daemon may already be running without the device, so pass it along.
    if ctx.options.provider == "ios" and ctx.options.device is not None:
        envelope["iosDevice"] = ctx.options.device
    return envelope


def _without_arguments(action: str) -> Handler:
    def handler(ctx: CommandContext) -> ActionEnvelope:
        return ctx.envelope(action)

    return handler


command("back")(_without_arguments("back"))
command("forward")(_without_arguments("forward"))
command("reload")(_without_arguments("reload"))
command("close", "quit", "exit")(_without_arguments("close"))


@command("connect")
def _connect(ctx: CommandContext) -> ActionEnvelope:
    endpoint = ctx.require(0, "connect", CONNECT_USAGE)
    if endpoint.startswith(_CDP_URL_PREFIXES):
        return ctx.envelope("launch", cdpUrl=endpoint)

    port = parse_u32(endpoint)
    if port is None:
        raise InvalidValueError(
            f"Invalid value: '{endpoint}' is not a valid port number or URL",
            CONNECT_USAGE,
        )
    if port == 0:
        raise InvalidValueError(
            "Invalid port: port must be greater than 0",
            CONNECT_USAGE,
        )
    if port > MAX_PORT:
        raise InvalidValueError(
            f"Invalid port: {port} is out of range (valid range: 1-{MAX_PORT})",
            CONNECT_USAGE,
        )
    return ctx.envelope("launch", cdpPort=port)
