"""CLI application entry point and command routing for agent-browser.

This module is the **sole error boundary** for the entire application.
It catches :class:`~agent_browser.exceptions.AgentBrowserError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — compiling, config loading and option
  resolution are delegated to the core and infrastructure layers.
* stdout carries only machine-readable output (envelopes, daemon
  responses, JSON-mode errors); every diagnostic goes to stderr through
  the Rich console.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import Any

from agent_browser.cli import exit_codes
from agent_browser.cli.console import console
from agent_browser.cli.help_text import DESCRIPTION, EPILOG
from agent_browser.core.compiler import CommandCompiler
from agent_browser.core.error_format import format_parse_error, format_parse_error_json
from agent_browser.core.flag_resolver import resolve_options, strip_global_flags
from agent_browser.core.models import (
    ActionEnvelope,
    EnvironmentSnapshot,
    LoadedConfig,
    ResolvedOptions,
)
from agent_browser.core.protocols import IdGenerator, StdinReader, Transport
from agent_browser.core.request_id import RequestIdGenerator
from agent_browser.exceptions import (
    AgentBrowserError,
    ParseError,
    TransportError,
    UnknownSubcommandError,
)
from agent_browser.infra.config_loader import load_config
from agent_browser.infra.environment import capture_environment
from agent_browser.version import __version__

_HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})
_VERSION_FLAGS: frozenset[str] = frozenset({"-V", "--version"})


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The parser only renders help and version output.  Command tokens
    are compiled by :class:`~agent_browser.core.compiler.CommandCompiler`,
    whose grammar is richer than argparse sub-commands can express.
    """
    parser = argparse.ArgumentParser(
        prog="agent-browser",
        usage="%(prog)s <command> [args] [options]",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _emit_json(payload: dict[str, Any]) -> None:
    """Write one JSON document as a single line on stdout."""
    print(json.dumps(payload, ensure_ascii=False))


def _report_parse_error(error: ParseError, options: ResolvedOptions) -> int:
    """Render *error* for the active output mode and return the exit code."""
    if options.json:
        _emit_json(format_parse_error_json(error))
    else:
        console.text(format_parse_error(error), style="red")
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_doctor(options: ResolvedOptions, loaded: LoadedConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from agent_browser.cli.doctor import run_doctor

    return run_doctor(options, loaded)


def _handle_session(args: Sequence[str], options: ResolvedOptions) -> int:
    """Dispatch ``session`` and ``session list``.

    Raises
    ------
    UnknownSubcommandError
        For any sub-command other than ``list``.
    TransportError
        For ``session list``, which needs to probe running daemons.
    """
    if not args:
        if options.json:
            _emit_json({"success": True, "data": {"session": options.session}})
        else:
            print(options.session)
        return exit_codes.SUCCESS

    if args[0] != "list":
        raise UnknownSubcommandError(args[0], ("list",))
    raise TransportError(
        "session list is not available without a daemon backend",
        hint="Use 'agent-browser session' to show the current session name.",
    )


def _send_headed_launch(
    transport: Transport,
    options: ResolvedOptions,
    next_id: IdGenerator,
) -> None:
    """Ask the daemon to relaunch with a visible window.

    Failure is not fatal: the command itself is still sent.
    """
    launch: ActionEnvelope = {"id": next_id(), "action": "launch", "headless": False}
    try:
        transport.send(launch, options.session)
    except TransportError as exc:
        if not options.json:
            console.warn(f"Could not switch to headed mode: {exc}")


def _dispatch(
    envelope: ActionEnvelope,
    transport: Transport,
    options: ResolvedOptions,
    next_id: IdGenerator,
) -> int:
    """Deliver *envelope* and print the daemon's reply.

    Raises
    ------
    TransportError
        When the daemon cannot be started or the request fails.
    """
    transport.ensure_daemon(options)
    if options.headed:
        _send_headed_launch(transport, options, next_id)

    response = transport.send(envelope, options.session)
    _emit_json(response)
    if response.get("success"):
        return exit_codes.SUCCESS
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    transport: Transport | None = None,
    env: EnvironmentSnapshot | None = None,
    read_stdin: StdinReader | None = None,
) -> int:
    """Run the agent-browser CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    transport:
        Daemon client.  When ``None``, the compiled envelope is written
        to stdout as one JSON line instead of being sent.
    env:
        Environment snapshot.  Captured from the process when ``None``.
    read_stdin:
        Source of ``eval --stdin`` scripts.  Defaults to process stdin.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    AgentBrowserError
        Config load and transport failures, for :func:`cli` to render.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    tokens = strip_global_flags(args)
    if not tokens or any(token in _HELP_FLAGS for token in tokens):
        parser.print_help()
        return exit_codes.SUCCESS
    if tokens[0] in _VERSION_FLAGS:
        parser.parse_args([tokens[0]])

    snapshot = env if env is not None else capture_environment()
    loaded = load_config(args, snapshot, warn=console.warn)
    options = resolve_options(args, loaded.config, snapshot)

    verb = tokens[0]
    if verb == "doctor":
        return _handle_doctor(options, loaded)

    next_id = RequestIdGenerator()
    try:
        if verb == "session":
            return _handle_session(tokens[1:], options)
        compiler = CommandCompiler(
            options,
            id_generator=next_id,
            read_stdin=read_stdin,
            warn=console.warn,
        )
        envelope = compiler.compile(tokens)
    except ParseError as exc:
        return _report_parse_error(exc, options)

    if options.debug:
        console.text(f"→ {json.dumps(envelope, ensure_ascii=False)}", style="dim")

    if transport is None:
        _emit_json(envelope)
        return exit_codes.SUCCESS

    try:
        return _dispatch(envelope, transport, options, next_id)
    except TransportError as exc:
        if not options.json:
            raise
        _emit_json({"success": False, "error": str(exc), "type": "transport_error"})
        return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AgentBrowserError as exc:
        console.text(f"Error: {exc}", style="bold red")
        if exc.hint:
            console.text(f"Hint: {exc.hint}", style="yellow")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
