"""Table-driven scanning of command-local flags.

Commands whose trailing arguments are a bag of flags (``diff``,
``cookies set``, ``snapshot``) declare a tuple of :class:`FlagSpec`
entries and hand their tokens to :func:`scan_flags`, instead of each
walking the token list with its own index arithmetic.

Two policies exist:

* **strict**: an unrecognised ``-`` token is ``InvalidValue "Unknown
  flag: X"``, a bare token is ``InvalidValue "Unexpected argument: X"``,
  a missing flag value is ``MissingArguments`` and a rejected value is
  ``InvalidValue``.
* **lenient**: unrecognised tokens are skipped, and a flag whose value
  is missing or rejected is ignored without consuming the next token.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from agent_browser.exceptions import InvalidValueError, MissingArgumentsError


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """Declaration of one flag accepted by a command."""

    names: tuple[str, ...]
    """Every spelling, e.g. ``("-b", "--baseline")``."""

    key: str
    """Envelope field the flag populates."""

    takes_value: bool = False
    """``True`` when the flag consumes the following token."""

    convert: Callable[[str], Any] | None = None
    """Turns the raw value into the envelope value.

    Signals rejection by raising :class:`ValueError`; the exception text
    becomes the ``InvalidValue`` message.
    """

    usage: str | None = None
    """Usage shown when this flag's value is missing or rejected."""

    @property
    def display_name(self) -> str:
        """Long spelling used in error contexts."""
        for name in self.names:
            if name.startswith("--"):
                return name
        return self.names[0]


def scan_flags(
    tokens: Sequence[str],
    specs: Sequence[FlagSpec],
    *,
    context: str,
    usage: str,
    strict: bool = True,
) -> dict[str, Any]:
    """Scan *tokens* against *specs* and return the collected fields.

    Parameters
    ----------
    tokens:
        Arguments after the command's positionals.
    specs:
        Accepted flags.  Value-less flags store ``True``.
    context:
        Command words used in ``MissingArguments`` contexts, e.g.
        ``"diff screenshot"``; the flag name is appended.
    usage:
        Command usage attached to unknown-flag and stray-token errors,
        and to flag errors whose spec has no usage of its own.
    strict:
        Select the strict or lenient policy described in the module
        docstring.

    Returns
    -------
    dict[str, Any]
        Envelope fields in the order their flags first appeared.

    Raises
    ------
    MissingArgumentsError
        (strict) A value flag is the last token.
    InvalidValueError
        (strict) Unknown flag, unexpected bare token, or a value the
        spec's converter rejected.
    """
    lookup = {name: spec for spec in specs for name in spec.names}
    fields: dict[str, Any] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        spec = lookup.get(token)
        if spec is None:
            if strict:
                if token.startswith("-"):
                    raise InvalidValueError(f"Unknown flag: {token}", usage)
                raise InvalidValueError(f"Unexpected argument: {token}", usage)
            i += 1
            continue

        if not spec.takes_value:
            fields[spec.key] = True
            i += 1
            continue

        if i + 1 >= len(tokens):
            if strict:
                raise MissingArgumentsError(
                    f"{context} {spec.display_name}",
                    spec.usage or usage,
                )
            i += 1
            continue

        raw = tokens[i + 1]
        if spec.convert is None:
            fields[spec.key] = raw
            i += 2
            continue

        try:
            value = spec.convert(raw)
        except ValueError as exc:
            if strict:
                raise InvalidValueError(str(exc), spec.usage or usage) from exc
            # Rejected values are left in place for the next iteration.
            i += 1
            continue
        fields[spec.key] = value
        i += 2
    return fields
