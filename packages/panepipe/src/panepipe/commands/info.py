"""Info command - show one pane."""

from typing import Any

from ..app import app
from ..errors import PaneClientError
from ._helpers import markdown_error_response, yes_no


@app.command(
    display="markdown",
    fastmcp={"type": "tool", "description": "Show details of a terminal pane"},
)
def info(state, pane_id: int) -> dict[str, Any]:
    """Show details of a terminal pane.

    Args:
        state: Application state.
        pane_id: Numeric pane id as listed by ls.

    Returns:
        Markdown formatted pane details.
    """
    try:
        pane = state.client.get_pane_info(pane_id)
    except PaneClientError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [{"type": "heading", "content": pane["title"] or f"Pane {pane['id']}", "level": 2}],
        "frontmatter": {
            "pane": pane["id"],
            "focused": yes_no(pane["is_focused"]),
            "floating": yes_no(pane["is_floating"]),
            "status": "ok",
        },
    }
