"""
Models for the authenticated session and the status snapshot shown to the UI.
"""

from pydantic import BaseModel, Field, field_validator


class SessionIdentity(BaseModel):
    """
    The authenticated user, as supplied by an identity provider.
    Treated as opaque, read-only input by the launch pipeline.
    """

    display_name: str
    unique_id: str
    access_token: str = Field(..., repr=False)

    class Config:
        frozen = True
        str_strip_whitespace = True

    @field_validator("display_name", "unique_id", "access_token")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Session fields cannot be empty.")
        return v


class UserInfo(BaseModel):
    name: str
    uuid: str


class StatusSnapshot(BaseModel):
    """Read-only launcher status for presentation layers."""

    authenticated: bool
    user: UserInfo | None = None
    version: str
