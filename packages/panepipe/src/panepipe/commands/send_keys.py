"""Send keys command - type text into a pane.

PUBLIC API:
  - send_keys: Type text into target pane
"""

from typing import Any

from ..app import app
from ..errors import PaneClientError
from ._helpers import markdown_error_response


@app.command(
    display="markdown",
    fastmcp={
        "type": "tool",
        "mime_type": "text/markdown",
        "tags": {"input", "control"},
        "description": "Type text into a terminal pane",
    },
)
def send_keys(state, pane_id: int, text: str, enter: bool = False) -> dict[str, Any]:
    """Type text into a pane.

    Text is written literally; pass enter=True to submit it.

    Args:
        state: Application state.
        pane_id: Numeric pane id as listed by ls.
        text: Characters to type. May be empty to only press Enter.
        enter: Press Enter after the text. Defaults to False.

    Returns:
        Markdown formatted result with send status.

    Examples:
        send_keys(3, "ls -la", enter=True)
        send_keys(3, "q")                   # Exit a pager
        send_keys(3, "", enter=True)        # Just Enter
    """
    try:
        state.client.send_keys(pane_id, text, enter=enter)
    except PaneClientError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [],
        "frontmatter": {
            "text": text[:40] + ("..." if len(text) > 40 else ""),
            "enter": enter,
            "pane": pane_id,
            "status": "sent",
        },
    }
