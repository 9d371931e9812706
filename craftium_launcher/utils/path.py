"""
Utilities for handling file paths.
"""

from pathlib import Path

from craftium_launcher.exceptions import LauncherIOError


def create_dir(directory_path: Path) -> None:
    """
    Creates a directory (and its parents) if it does not already exist.

    Raises:
        LauncherIOError: If the directory cannot be created.
    """
    try:
        directory_path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise LauncherIOError(str(directory_path), "permission", str(e)) from e
    except OSError as e:
        raise LauncherIOError(str(directory_path), "path", str(e)) from e
