"""Wire messages exchanged between a controller and the pane agent.

Requests and per-action params are decoded with strict pydantic models, so a
wrong shape surfaces as a descriptive error string instead of a crash.

PUBLIC API:
  - Request: Inbound request envelope
  - Response: Outbound response envelope
  - SendKeysParams: Params for send_keys
  - PaneIdParam: Params for actions targeting one pane
  - SendKeys: Validated send_keys action descriptor
  - SendInterrupt: Validated send_interrupt action descriptor
  - ActionDescriptor: Union of action descriptors
  - decode_request: Parse a raw payload into a Request
  - encode_response: Serialize a Response to its wire form
  - parse_response: Parse a wire response into a Response
  - format_validation_error: Flatten a pydantic ValidationError to one line
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import PaneClientError, TransportParseError
from .types import PaneDTO, PaneID

__all__ = [
    "Request",
    "Response",
    "SendKeysParams",
    "PaneIdParam",
    "SendKeys",
    "SendInterrupt",
    "ActionDescriptor",
    "decode_request",
    "encode_response",
    "parse_response",
    "format_validation_error",
]

MAX_PANE_ID = 2**32 - 1


def format_validation_error(error: ValidationError) -> str:
    """Flatten a ValidationError into "field: message" pairs.

    Args:
        error: Error raised by a pydantic model.

    Returns:
        Single-line detail, e.g. "pane_id: Field required; text: Field required".
    """
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


class Request(BaseModel):
    """Request from a controller to the agent."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    action: str
    params: Any = None


class Response(BaseModel):
    """Response from the agent to a controller.

    Exactly one of data/error is set; use ok() and fail() to build one.
    """

    id: str
    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, request_id: str, data: Any) -> "Response":
        return cls(id=request_id, success=True, data=data)

    @classmethod
    def fail(cls, request_id: str, error: str) -> "Response":
        return cls(id=request_id, success=False, error=error)

    def panes(self) -> list[PaneDTO]:
        """Panes listed in data, empty when data has none."""
        if not isinstance(self.data, dict):
            return []
        return [PaneDTO(**p) for p in self.data.get("panes", [])]

    def pane(self) -> PaneDTO:
        """Single pane in data.

        Raises:
            PaneClientError: If data carries no pane.
        """
        if not isinstance(self.data, dict) or "pane" not in self.data:
            raise PaneClientError("no pane in response data")
        return PaneDTO(**self.data["pane"])


class SendKeysParams(BaseModel):
    """Parameters for send_keys action."""

    model_config = ConfigDict(strict=True)

    pane_id: int = Field(ge=0, le=MAX_PANE_ID)
    text: str
    enter: bool = False


class PaneIdParam(BaseModel):
    """Parameters for actions that target a single pane."""

    model_config = ConfigDict(strict=True)

    pane_id: int = Field(ge=0, le=MAX_PANE_ID)


@dataclass(frozen=True)
class SendKeys:
    """Type text into a pane, optionally followed by Enter."""

    pane_id: PaneID
    text: str
    enter: bool = False

    def to_data(self) -> dict[str, Any]:
        return {"action": "send_keys", "pane_id": self.pane_id, "text": self.text, "enter": self.enter}


@dataclass(frozen=True)
class SendInterrupt:
    """Send Ctrl+C to a pane."""

    pane_id: PaneID

    def to_data(self) -> dict[str, Any]:
        return {"action": "send_interrupt", "pane_id": self.pane_id}


type ActionDescriptor = SendKeys | SendInterrupt


def decode_request(payload: str | bytes) -> Request:
    """Parse a raw JSON payload into a Request.

    Args:
        payload: Serialized request.

    Returns:
        Decoded Request, params defaulting to None.

    Raises:
        TransportParseError: If the payload is not valid JSON or not a Request.
    """
    try:
        return Request.model_validate_json(payload)
    except ValidationError as e:
        raise TransportParseError(format_validation_error(e)) from e


def encode_response(response: Response) -> str:
    """Serialize a Response, omitting absent data/error."""
    return response.model_dump_json(exclude_none=True)


def parse_response(payload: str | bytes) -> Response:
    """Parse a wire response.

    Raises:
        PaneClientError: If the payload is not a valid Response.
    """
    try:
        return Response.model_validate_json(payload)
    except ValidationError as e:
        raise PaneClientError(f"failed to parse agent response: {format_validation_error(e)}") from e
