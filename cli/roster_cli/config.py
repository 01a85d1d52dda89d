"""
Configuration management for Roster CLI.

Config file (optional), ~/.roster/config.json:
  {
    "data_file": "/home/me/school/students.json",
    "storage_key": "students",
    "log_level": "INFO"
  }

Resolution order for each setting:
  1. Environment variable (ROSTER_DATA_FILE, ROSTER_STORAGE_KEY, ROSTER_LOG_LEVEL)
  2. Command line flag (--data-file, --key), passed to the constructor
  3. Value from the config file
  4. Fallback default

Usage:
  # Keep a separate roster per class
  export ROSTER_DATA_FILE=~/school/class_a.json
  roster

  # Or per invocation
  roster --data-file ~/school/class_b.json
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from roster.kernel.store import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILENAME = "students.json"
DEFAULT_LOG_LEVEL = "WARNING"


class Config:
    """Config manager for Roster CLI."""

    def __init__(
        self,
        data_file_override: str | None = None,
        key_override: str | None = None,
        config_dir: Path | None = None,
    ):
        """
        Initialize config.

        Args:
            data_file_override: Optional --data-file flag value
            key_override: Optional --key flag value
            config_dir: Directory holding config.json (default ~/.roster)
        """
        self.config_dir = config_dir or Path.home() / ".roster"
        self.config_file = self.config_dir / "config.json"
        self._data: dict = {}
        self._data_file_override = data_file_override
        self._key_override = key_override
        self._load()

    def _load(self):
        """Load config from disk. A broken file is ignored."""
        if not self.config_file.exists():
            return
        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("config: ignoring unreadable %s: %s", self.config_file, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning("config: ignoring %s, expected a JSON object", self.config_file)

    @property
    def data_file(self) -> Path:
        """
        Path of the JSON file holding the storage slot.

        Resolution order:
        1. ROSTER_DATA_FILE environment variable
        2. --data-file flag
        3. data_file from config
        4. Fallback: <config_dir>/students.json
        """
        env_path = os.environ.get("ROSTER_DATA_FILE")
        if env_path:
            return Path(env_path).expanduser()

        if self._data_file_override:
            return Path(self._data_file_override).expanduser()

        configured = self._data.get("data_file")
        if configured:
            return Path(configured).expanduser()

        return self.config_dir / DEFAULT_DATA_FILENAME

    @property
    def storage_key(self) -> str:
        """Name of the slot inside the data file."""
        return (
            os.environ.get("ROSTER_STORAGE_KEY")
            or self._key_override
            or self._data.get("storage_key")
            or DEFAULT_STORAGE_KEY
        )

    @property
    def log_level(self) -> str:
        level = os.environ.get("ROSTER_LOG_LEVEL") or self._data.get("log_level") or DEFAULT_LOG_LEVEL
        return str(level).upper()
