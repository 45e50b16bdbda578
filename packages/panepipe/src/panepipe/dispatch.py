"""Command dispatcher - validates requests against the pane registry.

Dispatch is two-phase. validate() decodes params, checks the target pane and
returns the Response together with an action descriptor; it performs no I/O.
Carrying out the descriptor is left to an executor owned by the caller.

PUBLIC API:
  - Action: Closed set of supported actions
  - Validated: Response plus optional action descriptor
  - CommandDispatcher: Action-to-handler routing
  - dispatcher: Default dispatcher with all actions registered
  - validate: Validate a request with the default dispatcher
  - dispatch: Validate a request and return only the Response
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import DispatchError, InvalidParamsError, PaneNotFoundError, UnknownActionError
from .ipc import (
    ActionDescriptor,
    PaneIdParam,
    Request,
    Response,
    SendInterrupt,
    SendKeys,
    SendKeysParams,
    format_validation_error,
)
from .registry import PaneRegistry
from .types import PaneID, PaneRecord

__all__ = ["Action", "Validated", "CommandDispatcher", "dispatcher", "validate", "dispatch"]

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Actions a controller may request."""

    LIST_PANES = "list_panes"
    GET_PANE_INFO = "get_pane_info"
    SEND_KEYS = "send_keys"
    SEND_INTERRUPT = "send_interrupt"

    @classmethod
    def parse(cls, name: str) -> "Action":
        """Resolve an action name.

        Raises:
            UnknownActionError: If name is not a supported action.
        """
        try:
            return cls(name)
        except ValueError:
            raise UnknownActionError(name) from None


@dataclass(frozen=True)
class Outcome:
    """Successful handler result."""

    data: Any
    action: ActionDescriptor | None = None


@dataclass(frozen=True)
class Validated:
    """Result of validate(): the Response and, for actions, what to execute."""

    response: Response
    action: ActionDescriptor | None = None


type Handler = Callable[[Any, PaneRegistry], Outcome]


class CommandDispatcher:
    """Routes requests to action handlers.

    Handlers receive the raw params and a read-only registry, and either
    return an Outcome or raise a DispatchError. The dispatcher holds no state
    across calls beyond its handler table.
    """

    def __init__(self):
        self._handlers: dict[Action, Handler] = {}

    def method(self, action: Action) -> Callable[[Handler], Handler]:
        """Register a handler for action."""

        def decorator(func: Handler) -> Handler:
            self._handlers[action] = func
            return func

        return decorator

    def validate(self, request: Request, registry: PaneRegistry) -> Validated:
        """Decode and check request against registry.

        Args:
            request: Decoded request envelope.
            registry: Current pane topology.

        Returns:
            Validated with a Response carrying the request id. The action
            descriptor is set only for successful send_keys/send_interrupt.
        """
        try:
            action = Action.parse(request.action)
            handler = self._handlers.get(action)
            if handler is None:
                raise UnknownActionError(request.action)
            outcome = handler(request.params, registry)
        except DispatchError as e:
            logger.debug(f"Request {request.id} rejected: {e.message}")
            return Validated(Response.fail(request.id, e.message))

        return Validated(Response.ok(request.id, outcome.data), outcome.action)

    def dispatch(self, request: Request, registry: PaneRegistry) -> Response:
        return self.validate(request, registry).response


def _decode_params[P: BaseModel](model: type[P], params: Any) -> P:
    try:
        return model.model_validate(params)
    except ValidationError as e:
        raise InvalidParamsError(format_validation_error(e)) from e


def _require_pane(registry: PaneRegistry, pane_id: PaneID) -> PaneRecord:
    pane = registry.get_by_id(pane_id)
    if pane is None:
        raise PaneNotFoundError(pane_id)
    return pane


dispatcher = CommandDispatcher()


@dispatcher.method(Action.LIST_PANES)
def list_panes(params: Any, registry: PaneRegistry) -> Outcome:
    """List all tracked panes; params are ignored."""
    return Outcome({"panes": [p.to_dto() for p in registry.list()]})


@dispatcher.method(Action.GET_PANE_INFO)
def get_pane_info(params: Any, registry: PaneRegistry) -> Outcome:
    p = _decode_params(PaneIdParam, params)
    pane = _require_pane(registry, p.pane_id)
    return Outcome({"pane": pane.to_dto()})


@dispatcher.method(Action.SEND_KEYS)
def send_keys(params: Any, registry: PaneRegistry) -> Outcome:
    """Validate send_keys; the data echoes the descriptor."""
    p = _decode_params(SendKeysParams, params)
    _require_pane(registry, p.pane_id)
    action = SendKeys(pane_id=p.pane_id, text=p.text, enter=p.enter)
    return Outcome(action.to_data(), action)


@dispatcher.method(Action.SEND_INTERRUPT)
def send_interrupt(params: Any, registry: PaneRegistry) -> Outcome:
    p = _decode_params(PaneIdParam, params)
    _require_pane(registry, p.pane_id)
    action = SendInterrupt(pane_id=p.pane_id)
    return Outcome(action.to_data(), action)


def validate(request: Request, registry: PaneRegistry) -> Validated:
    """Validate request with the default dispatcher."""
    return dispatcher.validate(request, registry)


def dispatch(request: Request, registry: PaneRegistry) -> Response:
    """Dispatch request with the default dispatcher and return its Response."""
    return dispatcher.dispatch(request, registry)
