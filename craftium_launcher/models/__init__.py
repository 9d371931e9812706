"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the launcher, such as settings, assets and sessions.
"""

from .assets import Asset, DownloadTask, InstallationState, ProcessResult
from .config import LauncherConfig, LauncherSettings
from .session import SessionIdentity, StatusSnapshot, UserInfo

__all__ = [
    "Asset",
    "DownloadTask",
    "InstallationState",
    "LauncherConfig",
    "LauncherSettings",
    "ProcessResult",
    "SessionIdentity",
    "StatusSnapshot",
    "UserInfo",
]
