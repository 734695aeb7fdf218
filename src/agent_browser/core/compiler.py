"""Compilation of command tokens into action envelopes.

:class:`CommandCompiler` is the single entry point: it validates the
token list, looks the verb up in the registry populated by
:mod:`agent_browser.core.commands`, and lets the handler build the
envelope.  Errors surface as :class:`~agent_browser.exceptions.ParseError`
subclasses and are never partially applied.

The compiler performs no I/O of its own.  Two collaborators are
injected: a warning sink for ignored options and a stdin reader for
``eval --stdin``.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence

from agent_browser.core import commands  # noqa: F401  (registers handlers)
from agent_browser.core.models import ActionEnvelope, ResolvedOptions
from agent_browser.core.protocols import IdGenerator, StdinReader, WarningSink
from agent_browser.core.registry import CommandContext, CommandRegistry, registry
from agent_browser.core.request_id import RequestIdGenerator
from agent_browser.exceptions import MissingArgumentsError, UnknownCommandError

ANNOTATE_WARNING: str = "--annotate only applies to the screenshot command"


def read_process_stdin() -> Iterable[str]:
    """Yield lines of the process's standard input without line endings."""
    for line in sys.stdin:
        yield line.removesuffix("\n").removesuffix("\r")


def _discard_warning(message: str) -> None:
    return None


class CommandCompiler:
    """Compile token lists against one set of resolved options.

    Parameters
    ----------
    options:
        Global options for this invocation.
    id_generator:
        Produces each envelope's ``id``.  Defaults to a
        :class:`~agent_browser.core.request_id.RequestIdGenerator`.
    read_stdin:
        Supplies the script for ``eval --stdin``.  Defaults to reading
        the process's standard input.
    warn:
        Receives non-fatal diagnostics.  Defaults to discarding them.
    command_registry:
        Verb table to compile against.
    """

    def __init__(
        self,
        options: ResolvedOptions,
        *,
        id_generator: IdGenerator | None = None,
        read_stdin: StdinReader | None = None,
        warn: WarningSink | None = None,
        command_registry: CommandRegistry = registry,
    ) -> None:
        self._options = options
        self._next_id: IdGenerator = id_generator or RequestIdGenerator()
        self._read_stdin: StdinReader = read_stdin or read_process_stdin
        self._warn: WarningSink = warn or _discard_warning
        self._registry = command_registry

    def compile(self, tokens: Sequence[str]) -> ActionEnvelope:
        """Compile *tokens* (verb first) into an envelope.

        Raises
        ------
        MissingArgumentsError
            When *tokens* is empty or a required argument is absent.
        UnknownCommandError
            When the verb is not registered.
        ParseError
            Any other command-specific validation failure.
        """
        if not tokens:
            raise MissingArgumentsError("", "<command> [args...]")

        verb = tokens[0]
        if self._options.cli_annotate and verb != "screenshot":
            self._warn(ANNOTATE_WARNING)

        handler = self._registry.lookup(verb)
        if handler is None:
            raise UnknownCommandError(verb)

        ctx = CommandContext(
            verb=verb,
            args=tuple(tokens[1:]),
            options=self._options,
            request_id=self._next_id(),
            read_stdin=self._read_stdin,
        )
        return handler(ctx)


def compile_command(
    tokens: Sequence[str],
    options: ResolvedOptions | None = None,
    *,
    id_generator: IdGenerator | None = None,
    read_stdin: StdinReader | None = None,
    warn: WarningSink | None = None,
) -> ActionEnvelope:
    """One-shot convenience wrapper around :class:`CommandCompiler`."""
    compiler = CommandCompiler(
        options or ResolvedOptions(),
        id_generator=id_generator,
        read_stdin=read_stdin,
        warn=warn,
    )
    return compiler.compile(tokens)
