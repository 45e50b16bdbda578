"""Pane agent - host glue around the registry and dispatcher.

The agent owns the pane registry. Topology updates replace it wholesale;
pipe payloads are decoded, validated, executed and answered one at a time.

PUBLIC API:
  - PaneAgent: Registry owner and payload handler
"""

import logging

from .dispatch import CommandDispatcher, dispatcher as default_dispatcher
from .errors import ExecutionError, TransportParseError
from .executor import ActionExecutor
from .ipc import Response, decode_request, encode_response
from .registry import PaneRegistry
from .types import Snapshot

__all__ = ["PaneAgent"]

logger = logging.getLogger(__name__)


class PaneAgent:
    """Tracks pane topology and answers controller requests.

    Attributes:
        registry: Latest pane topology.
        executor: Carries out validated actions. None validates only.
        dispatcher: Action routing.
    """

    def __init__(
        self,
        executor: ActionExecutor | None = None,
        dispatcher: CommandDispatcher | None = None,
    ):
        self.registry = PaneRegistry()
        self.executor = executor
        self.dispatcher = dispatcher or default_dispatcher

    def on_pane_update(self, snapshot: Snapshot) -> None:
        """Apply a full topology snapshot."""
        self.registry.replace_snapshot(snapshot)

    def handle(self, payload: str | bytes) -> Response:
        """Decode, validate and execute one request payload.

        Args:
            payload: Serialized request.

        Returns:
            Response for the controller. A payload that is not a Request at
            all gets a failed Response with an empty id.
        """
        try:
            request = decode_request(payload)
        except TransportParseError as e:
            logger.warning(f"Dropping malformed request: {e.detail}")
            return Response.fail("", e.message)

        validated = self.dispatcher.validate(request, self.registry)
        if validated.action is None or self.executor is None:
            return validated.response

        try:
            self.executor.execute(validated.action)
        except ExecutionError as e:
            logger.error(f"Request {request.id} failed to execute: {e}")
            return Response.fail(request.id, f"execution failed: {e.detail}")

        return validated.response

    def handle_payload(self, payload: str | bytes) -> str:
        """Like handle(), but returns the serialized Response."""
        return encode_response(self.handle(payload))

    def status_line(self) -> str:
        return f"panepipe | Panes: {len(self.registry)}"
