"""Terminal pane registry and command agent.

Tracks the live set of terminal panes in a multiplexer session and answers
controller requests over a message pipe: list panes, inspect one, type text
into one, or interrupt it. Validation is pure; a separate executor performs
the side effects.

PUBLIC API:
  - PaneRegistry: Latest pane topology
  - PaneAgent: Registry owner and pipe payload handler
  - dispatch: Validate a request and produce its Response
  - validate: Validate a request and produce Response plus action descriptor
  - Request, Response: Wire messages
  - SendKeys, SendInterrupt: Action descriptors
  - PaneClient: Controller-side socket client
"""

from .agent import PaneAgent
from .client import PaneClient
from .dispatch import dispatch, validate
from .ipc import Request, Response, SendInterrupt, SendKeys
from .registry import PaneRegistry

__version__ = "0.1.0"
__all__ = [
    "PaneRegistry",
    "PaneAgent",
    "dispatch",
    "validate",
    "Request",
    "Response",
    "SendKeys",
    "SendInterrupt",
    "PaneClient",
]
