"""``agent-browser doctor`` — environment diagnostics command.

Summarises the runtime, the config files that were consulted and the
options they resolved to, as a Rich table.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from agent_browser.cli import exit_codes
from agent_browser.cli.console import console
from agent_browser.core.models import ConfigSource, LoadedConfig, ResolvedOptions
from agent_browser.version import __version__

Check = tuple[str, str, str]

_STATUS_MARKUP: dict[str, str] = {
    "loaded": "[green]OK[/green]",
    "absent": "[dim]SKIP[/dim]",
    "invalid": "[yellow]WARN[/yellow]",
}


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _agent_browser_version_check() -> Check:
    """Return (label, value, status) for the agent-browser version row."""
    return "agent-browser", __version__, "[green]OK[/green]"


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _config_source_check(source: ConfigSource) -> Check:
    """Return (label, value, status) for one consulted config file."""
    value = str(source.path)
    if source.status == "absent":
        value = f"{value} (not found)"
    return f"{source.origin} config", value, _STATUS_MARKUP[source.status]


def _option_checks(options: ResolvedOptions) -> list[Check]:
    """Return rows describing the resolved options."""
    ok = "[green]OK[/green]"
    return [
        ("session", options.session, ok),
        ("provider", options.provider or "local", ok),
        ("output", "json" if options.json else "text", ok),
    ]


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "SKIP", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nagent-browser doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<44} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<44} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks(options: ResolvedOptions, loaded: LoadedConfig) -> list[Check]:
    """Gather every diagnostic row, in display order."""
    checks = [_agent_browser_version_check(), _python_version_check()]
    checks.extend(_config_source_check(source) for source in loaded.sources)
    checks.extend(_option_checks(options))
    return checks


def run_doctor(options: ResolvedOptions, loaded: LoadedConfig) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Parameters
    ----------
    options:
        Options resolved for this invocation.
    loaded:
        Config load result, whose ``sources`` list the files consulted.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks(options, loaded)
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="agent-browser doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=16)
        table.add_column("Value", min_width=24)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    invalid = [source for source in loaded.sources if source.status == "invalid"]
    for source in invalid:
        console.warn(f"{source.path} was ignored: {source.detail}")

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
