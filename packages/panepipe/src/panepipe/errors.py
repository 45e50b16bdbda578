"""Error taxonomy for panepipe.

Dispatch errors are raised inside action handlers and converted to a failed
Response at the dispatch boundary; they never reach the transport as
exceptions. TransportParseError belongs to the transport boundary, where the
envelope itself is decoded. Collaborator errors belong to tmux, the executor
and the client.

PUBLIC API:
  - DispatchError: Base for failures that render into a Response error
  - UnknownActionError: Action outside the supported set
  - InvalidParamsError: Params failed schema validation
  - PaneNotFoundError: Target pane absent from the registry
  - TransportParseError: Payload is not a Request at all
  - TmuxError: tmux command failed
  - ExecutionError: Executor could not carry out an action
  - PaneClientError: Controller-side request failure
"""


class DispatchError(Exception):
    """Base exception for failures reported through a Response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownActionError(DispatchError):
    def __init__(self, action: str):
        super().__init__(f"unknown action: {action}")
        self.action = action


class InvalidParamsError(DispatchError):
    def __init__(self, detail: str):
        super().__init__(f"invalid params: {detail}")
        self.detail = detail


class PaneNotFoundError(DispatchError):
    def __init__(self, pane_id: int):
        super().__init__(f"pane not found: {pane_id}")
        self.pane_id = pane_id


class TransportParseError(Exception):
    """Raised when a payload cannot be decoded as a Request envelope."""

    def __init__(self, detail: str):
        self.message = f"Failed to parse request: {detail}"
        super().__init__(self.message)
        self.detail = detail


class TmuxError(Exception):
    """Base exception for all tmux operations."""

    pass


class ExecutionError(Exception):
    """Raised when an executor fails to apply an action to its pane."""

    def __init__(self, pane_id: int, detail: str):
        super().__init__(f"pane {pane_id}: {detail}")
        self.pane_id = pane_id
        self.detail = detail


class PaneClientError(RuntimeError):
    """Raised by PaneClient when a request fails or the daemon is unreachable."""

    pass
