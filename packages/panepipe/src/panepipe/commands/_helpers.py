"""Shared response helpers for commands.

PUBLIC API:
  - markdown_error_response: Create error response for markdown display
  - table_error_response: Create error response for table display
  - yes_no: Render a flag for tables
"""

import logging
from typing import Any

__all__ = ["markdown_error_response", "table_error_response", "yes_no"]

logger = logging.getLogger(__name__)


def markdown_error_response(message: str) -> dict[str, Any]:
    """Create error response for markdown display commands.

    Args:
        message: The error message to display

    Returns:
        Markdown display dict with error element
    """
    return {"elements": [{"type": "text", "content": f"Error: {message}"}], "frontmatter": {"status": "error"}}


def table_error_response(message: str) -> list[dict[str, Any]]:
    """Create error response for table display commands.

    Tables show nothing on error; the message is logged instead.
    """
    logger.warning(f"Command failed: {message}")
    return []


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"
