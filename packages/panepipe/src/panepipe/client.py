"""Socket client for the panepipe daemon.

PUBLIC API:
  - PaneClient: Client wrapper for the agent socket
  - generate_request_id: Unique request id
"""

import itertools
import logging
import socket
import time
from pathlib import Path
from typing import Any

from .errors import PaneClientError
from .ipc import Request, Response, parse_response
from .types import PaneDTO, PaneID

__all__ = ["PaneClient", "generate_request_id"]

logger = logging.getLogger(__name__)

_request_counter = itertools.count(1)


def generate_request_id() -> str:
    """Create a unique request id of the form "<time_ns>-<counter>"."""
    return f"{time.time_ns()}-{next(_request_counter)}"


class PaneClient:
    """Client for the panepipe agent socket.

    Each request opens a connection, writes one JSON line and reads one line
    back.

    Attributes:
        socket_path: Path of the agent's unix socket.
        timeout: Socket timeout in seconds.
    """

    def __init__(self, socket_path: Path | None = None, timeout: float = 5.0):
        if socket_path is None:
            from .config import get_config_manager

            socket_path = get_config_manager().socket_path
        self.socket_path = socket_path
        self.timeout = timeout

    def request(self, action: str, params: dict[str, Any] | None = None) -> Response:
        """Send one request and return the agent's Response.

        Args:
            action: Action name (e.g., "list_panes").
            params: Action params, omitted when None.

        Raises:
            PaneClientError: If the daemon is unreachable or answers garbage.
        """
        request = Request(id=generate_request_id(), action=action, params=params)
        line = request.model_dump_json(exclude_none=True).encode() + b"\n"

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect(str(self.socket_path))
                sock.sendall(line)
                reply = self._read_line(sock)
        except (FileNotFoundError, ConnectionRefusedError) as e:
            logger.error(f"Failed to connect to agent at {self.socket_path}: {e}")
            raise PaneClientError(
                "Cannot connect to agent. Is it running? Try 'python -m panepipe daemon' to start it."
            ) from e
        except OSError as e:
            raise PaneClientError(f"Agent request failed: {e}") from e

        response = parse_response(reply)
        if response.id != request.id:
            logger.warning(f"Response id {response.id!r} does not match request {request.id!r}")
        return response

    @staticmethod
    def _read_line(sock: socket.socket) -> bytes:
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
            if chunk.endswith(b"\n"):
                break
        data = b"".join(chunks)
        if not data:
            raise PaneClientError("Agent closed connection without a response")
        return data

    def _call(self, action: str, params: dict[str, Any] | None = None) -> Response:
        response = self.request(action, params)
        if not response.success:
            raise PaneClientError(response.error or "unknown error")
        return response

    # Convenience methods for each action

    def list_panes(self) -> list[PaneDTO]:
        """All terminal panes in the tracked session."""
        return self._call("list_panes").panes()

    def get_pane_info(self, pane_id: PaneID) -> PaneDTO:
        return self._call("get_pane_info", {"pane_id": pane_id}).pane()

    def send_keys(self, pane_id: PaneID, text: str, enter: bool = False) -> None:
        """Type text into a pane, then Enter if requested."""
        self._call("send_keys", {"pane_id": pane_id, "text": text, "enter": enter})

    def send_interrupt(self, pane_id: PaneID) -> None:
        """Send Ctrl+C to a pane."""
        self._call("send_interrupt", {"pane_id": pane_id})
