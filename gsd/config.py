"""Configuration for the GSD hooks.

Reads from ~/.gsd/config.json with sensible defaults. The home directory is
only looked up when a Config is built, never at import time.
"""

import json
from pathlib import Path
from typing import Optional


CONFIG_FILENAME = "config.json"
LOG_FILENAME = "hooks.log"

DEFAULTS = {
    # Hook logging (file only, hooks must never print)
    "log_enabled": True,
    "log_path": None,  # None: hooks.log next to config.json
}


def default_config_dir() -> Path:
    return Path.home() / ".gsd"


class Config:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or default_config_dir() / CONFIG_FILENAME
        self._data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.config_path.exists():
            return
        try:
            with open(self.config_path, encoding="utf-8") as f:
                user_config = json.load(f)
        except (OSError, ValueError):
            # A broken config must not stop the hook
            return
        if isinstance(user_config, dict):
            self._data.update(user_config)

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    @property
    def log_file(self) -> Path:
        """Where hook logs go. Raises TypeError for a non-string log_path."""
        log_path = self._data.get("log_path")
        if log_path is None:
            return self.config_path.parent / LOG_FILENAME
        if not isinstance(log_path, str):
            raise TypeError(f"log_path must be a string, got {type(log_path).__name__}")
        return Path(log_path).expanduser()
