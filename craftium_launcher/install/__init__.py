"""
Installation Layer.

This package installs the Fabric loader and fetches the mod manifest.
"""

from .installation import InstallationManager
from .manifest import DEFAULT_ASSETS, AssetManifest, fetch_all

__all__ = ["DEFAULT_ASSETS", "AssetManifest", "InstallationManager", "fetch_all"]
