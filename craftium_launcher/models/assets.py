"""
Value types describing what gets installed and where.
"""

from pathlib import Path

from pathvalidate import sanitize_filename
from pydantic import BaseModel, field_validator


class Asset(BaseModel):
    """A named auxiliary package (mod) fetched from a remote URL."""

    name: str
    source_url: str
    extension: str = "jar"

    class Config:
        frozen = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or sanitize_filename(v) != v:
            raise ValueError(f"Asset name {v!r} is not a valid file name.")
        return v

    @field_validator("source_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Asset URL must be an http(s) URL, got {v!r}.")
        return v

    @property
    def file_name(self) -> str:
        return f"{self.name}.{self.extension}"

    def destination_in(self, directory: Path) -> Path:
        """Returns the path this asset is written to inside `directory`."""
        return directory / self.file_name


class DownloadTask(BaseModel):
    """One pending download produced by a manifest."""

    asset: Asset
    destination: Path

    class Config:
        frozen = True


class InstallationState(BaseModel):
    """Everything the install step needs to know about the target install."""

    runtime_version: str
    loader_version: str
    installer_path: Path
    installer_url: str
    game_dir: Path

    class Config:
        frozen = True


class ProcessResult(BaseModel):
    """The exit status of a finished child process."""

    exit_code: int

    class Config:
        frozen = True

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
