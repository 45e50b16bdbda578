"""Configuration management for panepipe.

Reads the [daemon] table of panepipe.toml:

    [daemon]
    socket = "/run/user/1000/panepipe/agent.sock"
    session = "work"
    poll_interval = 1.0
    log_level = "INFO"
"""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from .paths import SOCKET_PATH

logger = logging.getLogger(__name__)


def _find_config_file() -> Optional[Path]:
    """Find panepipe.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / "panepipe.toml"
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Manages configuration for panepipe."""

    def __init__(self, path: Optional[Path] = None):
        self._config_file = path or _find_config_file()
        self.data = _load_config(self._config_file)
        self._daemon_config = self.data.get("daemon", {})
        if self._config_file and self.data:
            logger.debug(f"Loaded config from {self._config_file}")

    @property
    def socket_path(self) -> Path:
        """Agent socket path."""
        raw = self._daemon_config.get("socket")
        return Path(raw).expanduser() if raw else SOCKET_PATH

    @property
    def session(self) -> Optional[str]:
        """tmux session to track, None for the current one."""
        return self._daemon_config.get("session")

    @property
    def poll_interval(self) -> float:
        """Seconds between topology refreshes."""
        return float(self._daemon_config.get("poll_interval", 1.0))

    @property
    def log_level(self) -> str:
        return str(self._daemon_config.get("log_level", "INFO")).upper()


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
