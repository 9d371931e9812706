"""
Storage Layer.

This package handles all data persistence: the launcher config.json and the
optional launcher.ini settings file.
"""

from .config_store import ConfigStore
from .settings_manager import SettingsManager

__all__ = ["ConfigStore", "SettingsManager"]
