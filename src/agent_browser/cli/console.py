"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) and plain
envelope output remain functional even when Rich is not installed.

All diagnostics go to stderr; stdout is reserved for envelopes and
JSON responses.
"""

from __future__ import annotations

import sys
from typing import Any

from agent_browser.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def text(self, message: str, *, style: str | None = None) -> None:
		"""Print *message* verbatim, with no markup interpretation.

		Usage strings contain ``[args...]`` and ``<url>`` which Rich would
		otherwise treat as markup tags.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(message, file=sys.stderr)
			return
		rich_console.print(message, style=style, markup=False, highlight=False)

	def warn(self, message: str) -> None:
		"""Print a non-fatal warning line."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(f"warning: {message}", file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(f"[yellow]⚠[/yellow] {escape(message)}")


console = _ConsoleProxy()
