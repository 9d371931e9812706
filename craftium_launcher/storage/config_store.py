"""
Persists the launcher's config.json.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from craftium_launcher.exceptions import ConfigurationError, LauncherIOError
from craftium_launcher.models.config import LauncherConfig

log = logging.getLogger(__name__)


class ConfigStore:
    """Reads and writes config.json. Every save replaces the whole file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path

    def save(self, config: LauncherConfig) -> None:
        """
        Writes `config`, discarding whatever the file held before.

        Raises:
            LauncherIOError: If the directory or file cannot be written.
        """
        payload = json.dumps(config.model_dump(), indent=2)
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as f:
                f.write(payload)
        except PermissionError as e:
            raise LauncherIOError(
                str(self.config_file_path), "permission", str(e)
            ) from e
        except OSError as e:
            raise LauncherIOError(str(self.config_file_path), "path", str(e)) from e
        log.debug(f"Saved launcher config to '{self.config_file_path}'.")

    def load(self) -> LauncherConfig | None:
        """Returns the saved config, or None if nothing has been saved yet."""
        if not self.config_file_path.is_file():
            return None
        try:
            with open(self.config_file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return LauncherConfig(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise ConfigurationError(
                f"Launcher config at '{self.config_file_path}' is malformed: {e}"
            ) from e
