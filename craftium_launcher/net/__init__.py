"""
Network Layer.

This package handles fetching remote resources to the local filesystem.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
