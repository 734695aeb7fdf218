"""The ``wait`` command and its overloads.

``wait`` picks one behaviour from the flags present, checked in a fixed
priority order:

1. ``--url``/``-u``: wait for the page URL to match a pattern.
2. ``--load``/``-l``: wait for a load state.
3. ``--fn``/``-f``: poll a JavaScript expression.
4. ``--text``/``-t``: wait for a text locator.
5. ``--download``/``-d``: wait for a download, optionally saving it.
6. otherwise the first token: milliseconds if it is an unsigned
   integer, else a selector.

Note that ``-f`` is also the global ``--full`` shorthand and is
stripped before commands are compiled, so only ``--fn`` reaches here
from the command line.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from agent_browser.core.models import ActionEnvelope
from agent_browser.core.registry import CommandContext, command
from agent_browser.exceptions import MissingArgumentsError
from agent_browser.utils.numbers import parse_u64

WAIT_USAGE = "wait <selector|ms|--url|--load|--fn|--text>"


@dataclass(frozen=True, slots=True)
class _ValueWait:
    names: tuple[str, ...]
    action: str
    key: str
    placeholder: str
    template: str = "{}"

    @property
    def context(self) -> str:
        return f"wait {self.names[0]}"

    @property
    def usage(self) -> str:
        return f"wait {self.names[0]} <{self.placeholder}>"


_VALUE_WAITS: tuple[_ValueWait, ...] = (
    _ValueWait(("--url", "-u"), "waitforurl", "url", "pattern"),
    _ValueWait(("--load", "-l"), "waitforloadstate", "state", "state"),
    _ValueWait(("--fn", "-f"), "waitforfunction", "expression", "expression"),
    _ValueWait(("--text", "-t"), "wait", "selector", "text", template="text={}"),
)
_DOWNLOAD_FLAGS = ("--download", "-d")


def _index_of(args: Sequence[str], names: Sequence[str]) -> int | None:
    for index, arg in enumerate(args):
        if arg in names:
            return index
    return None


def _wait_for_download(ctx: CommandContext, flag_index: int) -> ActionEnvelope:
    envelope = ctx.envelope("waitfordownload")
    path = ctx.arg(flag_index + 1)
    if path is not None and not path.startswith("--"):
        envelope["path"] = path

    timeout_index = _index_of(ctx.args, ("--timeout",))
    if timeout_index is not None:
        # An unparseable timeout falls back to the daemon default.
        timeout = parse_u64(ctx.arg(timeout_index + 1, ""))
        if timeout is not None:
            envelope["timeout"] = timeout
    return envelope


@command("wait")
def _wait(ctx: CommandContext) -> ActionEnvelope:
    for mode in _VALUE_WAITS:
        index = _index_of(ctx.args, mode.names)
        if index is None:
            continue
        value = ctx.require(index + 1, mode.context, mode.usage)
        return ctx.envelope(mode.action, **{mode.key: mode.template.format(value)})

    download_index = _index_of(ctx.args, _DOWNLOAD_FLAGS)
    if download_index is not None:
        return _wait_for_download(ctx, download_index)

    first = ctx.arg(0)
    if first is None:
        raise MissingArgumentsError("wait", WAIT_USAGE)
    timeout = parse_u64(first)
    if timeout is not None:
        return ctx.envelope("wait", timeout=timeout)
    return ctx.envelope("wait", selector=first)
