"""panepipe ReplKit2 application.

Controller-side REPL/MCP surface. Every command talks to a running panepipe
daemon through PaneClient; none of them touch tmux directly.
"""

from dataclasses import dataclass, field

from replkit2 import App

from .client import PaneClient


@dataclass
class PanePipeState:
    """Application state holding the agent client."""

    client: PaneClient = field(default_factory=PaneClient)


# Must be created before command imports for decorator registration
app = App(
    "panepipe",
    PanePipeState,
    uri_scheme="panepipe",
    fastmcp={
        "description": "Inspect and drive terminal panes through the panepipe agent",
        "tags": {"terminal", "automation", "panes"},
    },
)


# Command imports trigger @app.command decorator registration
from .commands import ls  # noqa: E402, F401
from .commands import info  # noqa: E402, F401
from .commands import send_keys  # noqa: E402, F401
from .commands import interrupt  # noqa: E402, F401
