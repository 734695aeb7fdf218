"""Static help text shown by ``agent-browser --help``.

Kept apart from :mod:`agent_browser.cli.app` so the parser module stays
readable; nothing here is computed.
"""

from __future__ import annotations

DESCRIPTION: str = "Fast browser automation CLI for AI agents."

EPILOG: str = """\
Core Commands:
  open <url>                 Navigate to URL
  click <sel> [--new-tab]    Click element (or @ref)
  dblclick <sel>             Double-click element
  type <sel> <text>          Type into element
  fill <sel> <text>          Clear and fill
  press <key>                Press key (Enter, Tab, Control+a)
  hover <sel>                Hover element
  focus <sel>                Focus element
  check <sel>                Check checkbox
  uncheck <sel>              Uncheck checkbox
  select <sel> <val...>      Select dropdown option
  drag <src> <dst>           Drag and drop
  upload <sel> <files...>    Upload files
  download <sel> <path>      Download file by clicking element
  scroll <dir> [px]          Scroll (up/down/left/right)
  scrollintoview <sel>       Scroll element into view
  wait <sel|ms>              Wait for element or time
  screenshot [path]          Take screenshot
  pdf <path>                 Save as PDF
  snapshot                   Accessibility tree with refs
  eval <js>                  Run JavaScript
  connect <port|url>         Connect to browser via CDP
  close                      Close browser

Navigation:
  back | forward | reload

Get Info:  agent-browser get <what> [selector]
  text, html, value, attr <name>, title, url, count, box, styles

Check State:  agent-browser is <what> <selector>
  visible, enabled, checked

Find Elements:  agent-browser find <locator> <value> <action> [text]
  role, text, label, placeholder, alt, title, testid, first, last, nth

Mouse:  agent-browser mouse <action> [args]
  move <x> <y>, down [btn], up [btn], wheel <dy> [dx]

Browser Settings:  agent-browser set <setting> [value]
  viewport <w> <h>, device <name>, geo <lat> <lng>
  offline [on|off], headers <json>, credentials <user> <pass>
  media [dark|light] [reduced-motion]

Network:  agent-browser network <action>
  route <url> [--abort|--body <json>]
  unroute [url]
  requests [--clear] [--filter <pattern>]

Storage:
  cookies [get|set|clear]    Manage cookies
  storage <local|session>    Manage web storage

Tabs and Frames:
  tab [new|list|close|<n>]   Manage tabs
  window new                 Open a new window
  frame <sel|main>           Switch frame
  dialog <accept|dismiss>    Answer the next dialog

Diff:
  diff snapshot              Compare the current snapshot with the last one
  diff screenshot --baseline <file>
  diff url <url1> <url2>

Debug:
  trace start|stop [path]    Record Playwright trace
  profiler start|stop [path] Record Chrome DevTools profile
  record start <path> [url]  Start video recording
  console [--clear]          View console logs
  errors [--clear]           View page errors

State and Sessions:
  state save|load <path>     Save or restore auth state
  state list|show|clear|clean|rename
  session                    Show current session name
  doctor                     Show environment diagnostics

Snapshot Options:
  -i, --interactive          Only interactive elements
  -c, --compact              Remove empty structural elements
  -C, --cursor               Include cursor-interactive elements
  -d, --depth <n>            Limit tree depth
  -s, --selector <sel>       Scope to CSS selector

Global Options:
  --session <name>           Isolated session (or AGENT_BROWSER_SESSION)
  --session-name <name>      Auto-save/restore state by name
  --profile <path>           Persistent browser profile
  --state <path>             Load storage state from JSON file
  --headers <json>           HTTP headers scoped to the opened URL's origin
  --executable-path <path>   Custom browser executable
  --extension <path>         Load browser extension (repeatable)
  --args <args>              Browser launch args, comma separated
  --user-agent <ua>          Custom User-Agent
  --proxy <server>           Proxy server URL
  --proxy-bypass <hosts>     Hosts that bypass the proxy
  --ignore-https-errors      Ignore HTTPS certificate errors
  --allow-file-access        Allow file:// URLs to read local files
  -p, --provider <name>      Browser provider
  --device <name>            iOS device name
  --cdp <port|url>           Connect via Chrome DevTools Protocol
  --auto-connect             Discover and connect to a running Chrome
  --color-scheme <scheme>    dark, light or no-preference
  --annotate                 Numbered labels on screenshots
  --config <path>            Use a custom config file
  --json                     JSON output
  --full, -f                 Full page screenshot
  --headed                   Show browser window
  --debug                    Print compiled requests to stderr

Configuration:
  ~/.agent-browser/config.json   User defaults
  ./agent-browser.json           Project overrides
  CLI flags > environment variables > project config > user config

Examples:
  agent-browser open example.com
  agent-browser snapshot -i
  agent-browser click @e2
  agent-browser fill @e3 "test@example.com"
  agent-browser find role button click --name Submit
  agent-browser get text @e1
  agent-browser screenshot --full
  agent-browser --json wait --load networkidle
"""
