"""Allow ``python -m agent_browser`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m agent_browser`` behaves identically to the
``agent-browser`` console script.
"""

from __future__ import annotations

from agent_browser.cli.app import cli

if __name__ == "__main__":
    cli()
