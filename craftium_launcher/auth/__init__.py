"""
Authentication Layer.

Session identities come from an external identity provider. This package
only holds the offline authenticator used when none is configured.
"""

from .session import OfflineAuthenticator

__all__ = ["OfflineAuthenticator"]
