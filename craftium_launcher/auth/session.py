"""
Offline stand-in for the federated sign-in flow.

Real sign-in happens in an external identity provider; this module only
produces a SessionIdentity so the pipeline can run without one.
"""

import logging
import re
import uuid

from craftium_launcher.exceptions import AuthenticationError
from craftium_launcher.models.session import SessionIdentity

log = logging.getLogger(__name__)

_PLAYER_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,16}$")
OFFLINE_ACCESS_TOKEN = "0" * 32


class OfflineAuthenticator:
    """Creates offline sessions with a UUID derived from the player name."""

    @staticmethod
    def offline_uuid(display_name: str) -> str:
        return str(uuid.uuid3(uuid.NAMESPACE_OID, f"OfflinePlayer:{display_name}"))

    def authenticate(self, display_name: str) -> SessionIdentity:
        """
        Returns an offline session for `display_name`.

        Raises:
            AuthenticationError: If the name is not a valid player name.
        """
        if not _PLAYER_NAME_PATTERN.match(display_name or ""):
            raise AuthenticationError(
                f"Invalid player name {display_name!r}: use 3-16 letters, "
                "digits or underscores."
            )
        log.debug(f"Created offline session for '{display_name}'.")
        return SessionIdentity(
            display_name=display_name,
            unique_id=self.offline_uuid(display_name),
            access_token=OFFLINE_ACCESS_TOKEN,
        )
