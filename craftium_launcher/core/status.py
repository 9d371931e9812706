"""
Read-only status snapshot for presentation layers.
"""

from craftium_launcher.models.config import LauncherSettings
from craftium_launcher.models.session import SessionIdentity, StatusSnapshot, UserInfo


class StatusService:
    """Answers the UI's status query from the current session and settings."""

    def __init__(
        self, settings: LauncherSettings, identity: SessionIdentity | None = None
    ):
        self.settings = settings
        self.identity = identity

    def get_status(self) -> StatusSnapshot:
        if self.identity is None:
            return StatusSnapshot(authenticated=False, version=self.settings.version)
        return StatusSnapshot(
            authenticated=True,
            user=UserInfo(
                name=self.identity.display_name, uuid=self.identity.unique_id
            ),
            version=self.settings.version,
        )
