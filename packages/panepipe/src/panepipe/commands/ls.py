"""List command - show all terminal panes tracked by the agent."""

from typing import Optional

from ..app import app
from ..errors import PaneClientError
from ..types import PaneRow
from ._helpers import table_error_response, yes_no


@app.command(
    display="table",
    headers=["ID", "Title", "Focused", "Floating"],
    fastmcp={"type": "tool", "description": "List terminal panes"},
)
def ls(state, prefix: Optional[str] = None) -> list[PaneRow]:
    """List terminal panes, optionally only those whose title starts with prefix."""
    try:
        panes = state.client.list_panes()
    except PaneClientError as e:
        return table_error_response(str(e))

    return [
        PaneRow(
            ID=p["id"],
            Title=p["title"],
            Focused=yes_no(p["is_focused"]),
            Floating=yes_no(p["is_floating"]),
        )
        for p in panes
        if not prefix or p["title"].startswith(prefix)
    ]
