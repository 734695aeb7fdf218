"""Protocols (interfaces) consumed by the core layer.

These define the contracts that collaborators injected from the CLI
layer must satisfy.  Core code depends ONLY on these protocols — never
on concrete implementations — preserving the dependency inversion
principle.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from agent_browser.core.models import ActionEnvelope, ResolvedOptions


class WarningSink(Protocol):
    """Receives non-fatal diagnostics (e.g. an ignored ``--annotate``)."""

    def __call__(self, message: str) -> None:
        ...  # pragma: no cover


class StdinReader(Protocol):
    """Returns the lines of standard input, without trailing newlines.

    Only ``eval --stdin`` consumes this; it is the single blocking read
    the compiler is allowed to perform.
    """

    def __call__(self) -> Iterable[str]:
        ...  # pragma: no cover


class IdGenerator(Protocol):
    """Produces the correlation token stored in an envelope's ``id``."""

    def __call__(self) -> str:
        ...  # pragma: no cover


class Transport(Protocol):
    """Contract for delivering envelopes to the automation daemon.

    Implementations own process lifecycle and sockets; the front-end
    only compiles requests and hands them over.
    """

    def ensure_daemon(self, options: ResolvedOptions) -> None:
        """Start the daemon for ``options.session`` unless it is running.

        Raises
        ------
        TransportError
            When the daemon cannot be started or reached.
        """
        ...  # pragma: no cover

    def send(self, envelope: ActionEnvelope, session: str) -> dict[str, Any]:
        """Send *envelope* to the daemon of *session* and return its reply.

        The reply is a JSON object with at least a boolean ``success``.

        Raises
        ------
        TransportError
            When the request cannot be delivered.
        """
        ...  # pragma: no cover
