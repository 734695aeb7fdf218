"""Infrastructure layer — process environment and config files.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).  Non-fatal
  diagnostics are passed to an injected ``warn`` callable.
* Raw ``OSError``/decoding exceptions are caught here and re-raised as
  :class:`~agent_browser.exceptions.AgentBrowserError` subclasses.
"""

from agent_browser.infra.config_loader import (
    PROJECT_CONFIG_FILENAME,
    load_config,
    project_config_path,
    user_config_path,
)
from agent_browser.infra.environment import capture_environment

__all__: list[str] = [
    "PROJECT_CONFIG_FILENAME",
    "capture_environment",
    "load_config",
    "project_config_path",
    "user_config_path",
]
