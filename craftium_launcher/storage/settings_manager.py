"""
Manages loading and saving of the optional launcher.ini settings file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from craftium_launcher.exceptions import ConfigurationError
from craftium_launcher.models.config import LauncherSettings

log = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "launcher.ini"


class SettingsManager:
    """Handles all operations related to the launcher's INI settings file."""

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir
        self.settings_file_path = root_dir / SETTINGS_FILE_NAME
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_settings(
        self, cli_options: dict[str, Any] | None = None
    ) -> LauncherSettings:
        """
        Loads settings from the INI file (if any), applies CLI overrides, and
        validates them.

        Args:
            cli_options: Options provided via the command line. None values
                are ignored.

        Returns:
            A validated, immutable LauncherSettings object.

        Raises:
            ConfigurationError: If the file cannot be parsed or validation fails.
        """
        settings_from_file: dict[str, Any] = {}
        if self.settings_file_path.is_file():
            try:
                self._parser.read(self.settings_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(f"Error parsing settings file: {e}") from e
            settings_from_file = self._get_settings_as_dict()
            log.debug(f"Loaded settings from '{self.settings_file_path}'.")

        if cli_options:
            settings_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        try:
            return LauncherSettings(**settings_from_file, root_dir=self.root_dir)
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed:\n{e}") from e

    def save_settings(self, settings: dict[str, Any]) -> None:
        """
        Creates and saves a settings file, filling unspecified keys with defaults.

        Args:
            settings: A dictionary of settings to save.
        """
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}
        defaults = LauncherSettings.model_construct()

        for key in sorted(LauncherSettings.get_ini_keys() - {"root_dir"}):
            value = settings.get(key, getattr(defaults, key, None))
            if isinstance(value, bool):
                config["DEFAULT"][key] = "true" if value else "false"
            elif value is not None:
                config["DEFAULT"][key] = str(value)

        try:
            self.settings_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file_path, "w", encoding="utf-8") as f:
                config.write(f)
        except OSError as e:
            raise ConfigurationError(f"Failed to save settings file: {e}") from e

    def _get_settings_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        known_keys = LauncherSettings.get_ini_keys() - {"root_dir"}
        unknown = set(section) - known_keys
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown settings: {', '.join(sorted(unknown))}"
                "[/yellow]"
            )

        data: dict[str, Any] = {}
        for key in known_keys:
            if key not in section:
                continue
            if key == "redownload_assets":
                try:
                    data[key] = section.getboolean(key)
                except ValueError as e:
                    raise ConfigurationError(
                        f"Invalid boolean for '{key}': {section[key]}"
                    ) from e
            else:
                data[key] = section.get(key)
        return data
