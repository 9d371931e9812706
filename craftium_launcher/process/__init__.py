"""
Process Layer.

This package starts external tools such as the loader installer and the game.
"""

from .runner import ProcessRunner

__all__ = ["ProcessRunner"]
