"""Command handlers, grouped by area.

Importing this package registers every verb with
:data:`agent_browser.core.registry.registry`.
"""

from agent_browser.core.commands import (  # noqa: F401
    capture,
    debugging,
    diff,
    interaction,
    navigation,
    queries,
    settings,
    state,
    tabs,
    waiting,
)
