"""Infrastructure: one-shot capture of the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from agent_browser.core.models import EnvironmentSnapshot


def capture_environment(
    environ: Mapping[str, str] | None = None,
    *,
    home: Path | None = None,
    cwd: Path | None = None,
) -> EnvironmentSnapshot:
    """Freeze environment variables, home and working directory.

    Parameters
    ----------
    environ:
        Variables to copy.  Defaults to :data:`os.environ`.
    home:
        Home directory.  Defaults to :meth:`pathlib.Path.home`.
    cwd:
        Working directory.  Defaults to :meth:`pathlib.Path.cwd`.
    """
    variables = dict(os.environ if environ is None else environ)
    return EnvironmentSnapshot(
        variables=MappingProxyType(variables),
        home=home if home is not None else Path.home(),
        cwd=cwd if cwd is not None else Path.cwd(),
    )
