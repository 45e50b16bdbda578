"""Filesystem locations used by panepipe.

PUBLIC API:
  - RUNTIME_DIR: Per-user runtime directory
  - SOCKET_PATH: Default agent socket
"""

import os
import tempfile
from pathlib import Path

__all__ = ["RUNTIME_DIR", "SOCKET_PATH"]

RUNTIME_DIR = Path(os.environ.get("XDG_RUNTIME_DIR") or tempfile.gettempdir()) / "panepipe"
SOCKET_PATH = RUNTIME_DIR / "agent.sock"
