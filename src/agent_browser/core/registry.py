"""Verb registry and the per-invocation command context.

Each command module registers its handlers with the :func:`command`
decorator::

    @command("open", "goto", "navigate")
    def _open(ctx: CommandContext) -> ActionEnvelope:
        ...

A handler receives a :class:`CommandContext` whose ``args`` are the
tokens after the verb, and either returns an envelope or raises a
:class:`~agent_browser.exceptions.ParseError` subclass.  Subcommand
families route through :func:`dispatch_subcommand` with a mapping from
subcommand word to handler; the mapping keys double as the list of
valid options shown to the user.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from agent_browser.core.models import ActionEnvelope, ResolvedOptions
from agent_browser.core.protocols import StdinReader
from agent_browser.exceptions import (
    InvalidValueError,
    MissingArgumentsError,
    UnknownSubcommandError,
)


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Everything a handler may consult while compiling one command."""

    verb: str
    """The verb as typed, which may be an alias (``goto`` for ``open``)."""

    args: tuple[str, ...]
    options: ResolvedOptions
    request_id: str
    read_stdin: StdinReader

    def envelope(self, action: str, **fields: Any) -> ActionEnvelope:
        """Start an envelope with ``id`` and ``action`` as its first keys."""
        return {"id": self.request_id, "action": action, **fields}

    def arg(self, index: int, default: str | None = None) -> str | None:
        """Return argument *index*, or *default* when absent."""
        if index < len(self.args):
            return self.args[index]
        return default

    def require(self, index: int, context: str, usage: str) -> str:
        """Return argument *index* or raise ``MissingArguments``."""
        if index < len(self.args):
            return self.args[index]
        raise MissingArgumentsError(context, usage)

    def require_number(
        self,
        index: int,
        parse: Callable[[str], float | None],
        context: str,
        usage: str,
        *,
        label: str,
    ) -> Any:
        """Return argument *index* converted by *parse*.

        Raises
        ------
        MissingArgumentsError
            The argument is absent.
        InvalidValueError
            *parse* rejected it; the message names *label*.
        """
        token = self.require(index, context, usage)
        value = parse(token)
        if value is None:
            raise InvalidValueError(
                f"Invalid {label}: '{token}' is not a valid number",
                usage,
            )
        return value

    def joined(self, start: int) -> str:
        """Join the arguments from *start* onwards with single spaces."""
        return " ".join(self.args[start:])

    def shift(self, count: int = 1) -> CommandContext:
        """Return a context whose arguments drop the first *count*."""
        return replace(self, args=self.args[count:])


Handler = Callable[[CommandContext], ActionEnvelope]


class CommandRegistry:
    """Mapping from verb (including aliases) to handler."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, verb: str, handler: Handler) -> None:
        """Bind *verb* to *handler*.

        Raises
        ------
        ValueError
            If *verb* is already registered.
        """
        if verb in self._handlers:
            raise ValueError(f"command already registered: {verb}")
        self._handlers[verb] = handler

    def command(self, *verbs: str) -> Callable[[Handler], Handler]:
        """Decorator registering the wrapped handler under every verb."""

        def decorator(handler: Handler) -> Handler:
            for verb in verbs:
                self.register(verb, handler)
            return handler

        return decorator

    def lookup(self, verb: str) -> Handler | None:
        return self._handlers.get(verb)

    def __contains__(self, verb: object) -> bool:
        return verb in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)


registry = CommandRegistry()
"""Process-wide registry populated by :mod:`agent_browser.core.commands`."""

command = registry.command


def dispatch_subcommand(
    ctx: CommandContext,
    table: Mapping[str, Handler],
    *,
    context: str,
    usage: str,
    valid_options: Sequence[str] | None = None,
) -> ActionEnvelope:
    """Route on the first argument of *ctx* through *table*.

    The chosen handler receives the context shifted past the
    subcommand word.

    Raises
    ------
    MissingArgumentsError
        No subcommand was given.
    UnknownSubcommandError
        The subcommand is not a key of *table*.
    """
    subcommand = ctx.arg(0)
    if subcommand is None:
        raise MissingArgumentsError(context, usage)
    handler = table.get(subcommand)
    if handler is None:
        raise UnknownSubcommandError(subcommand, valid_options or tuple(table))
    return handler(ctx.shift())
