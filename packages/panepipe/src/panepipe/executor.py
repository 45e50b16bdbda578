"""Action executors - carry out validated action descriptors.

PUBLIC API:
  - ActionExecutor: Protocol for anything that can execute a descriptor
  - CharsExecutor: Executor over a write_chars(pane_id, chars) capability
  - ENTER: Characters written for Enter
  - INTERRUPT: Characters written for an interrupt (Ctrl+C)
"""

import logging
from collections.abc import Callable
from typing import Protocol

from .errors import ExecutionError
from .ipc import ActionDescriptor, SendInterrupt, SendKeys
from .types import PaneID

__all__ = ["ActionExecutor", "CharsExecutor", "ENTER", "INTERRUPT"]

logger = logging.getLogger(__name__)

ENTER = "\n"
INTERRUPT = "\x03"

type WriteChars = Callable[[PaneID, str], None]


class ActionExecutor(Protocol):
    def execute(self, action: ActionDescriptor) -> None: ...


class CharsExecutor:
    """Executes descriptors by writing characters into panes.

    Attributes:
        write_chars: Writes chars to a pane, raising on failure.
    """

    def __init__(self, write_chars: WriteChars):
        self.write_chars = write_chars

    def execute(self, action: ActionDescriptor) -> None:
        """Apply action to its pane.

        Raises:
            ExecutionError: If writing to the pane fails.
        """
        match action:
            case SendKeys(pane_id=pane_id, text=text, enter=enter):
                self._write(pane_id, text)
                if enter:
                    self._write(pane_id, ENTER)
                logger.info(f"Sent {len(text)} chars to pane {pane_id} enter={enter}")
            case SendInterrupt(pane_id=pane_id):
                self._write(pane_id, INTERRUPT)
                logger.info(f"Sent interrupt to pane {pane_id}")

    def _write(self, pane_id: PaneID, chars: str) -> None:
        if not chars:
            return
        try:
            self.write_chars(pane_id, chars)
        except Exception as e:
            raise ExecutionError(pane_id, str(e)) from e
