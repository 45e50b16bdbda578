"""Interrupt command - send Ctrl+C to a pane.

PUBLIC API:
  - interrupt: Send interrupt signal to target pane
"""

from typing import Any

from ..app import app
from ..errors import PaneClientError
from ._helpers import markdown_error_response


@app.command(
    display="markdown",
    fastmcp={"type": "tool", "description": "Send interrupt signal to a pane"},
)
def interrupt(state, pane_id: int) -> dict[str, Any]:
    """Send Ctrl+C to a pane."""
    try:
        state.client.send_interrupt(pane_id)
    except PaneClientError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [],
        "frontmatter": {"action": "interrupt", "pane": pane_id, "status": "sent"},
    }
