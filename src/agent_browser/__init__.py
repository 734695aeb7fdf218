"""agent-browser — command front-end for a browser-automation daemon.

Compiles free-form command lines into JSON action envelopes, resolving
runtime options from CLI flags, environment variables, and layered
config files.
"""

from agent_browser.version import __version__

__all__: list[str] = ["__version__"]
