"""
craftium-launcher: provisions a Fabric client install and launches it.
"""

__version__ = "1.0.0"
