"""Agent daemon - socket transport and topology refresh.

PUBLIC API:
  - PanePipeDaemon: Main daemon class with async socket server
"""

from .server import PanePipeDaemon

__all__ = ["PanePipeDaemon"]
