"""
Pydantic models for launcher settings and the persisted launcher config.
Provides robust validation for all settings.
"""

import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_INSTALLER_URL_TEMPLATE = (
    "https://meta.fabricmc.net/v2/versions/loader/"
    "{runtime_version}/{loader_version}/{installer_version}/client/jar"
)

_HEAP_SIZE_PATTERN = re.compile(r"^\d+[KMG]$")


def get_default_root_dir() -> Path:
    """Returns the launcher home, honouring the CRAFTIUM_HOME override."""
    override = os.getenv("CRAFTIUM_HOME")
    if override:
        return Path(override).expanduser()
    return Path("~/.craftiumclient").expanduser()


class LauncherSettings(BaseModel):
    """
    Immutable launcher settings, built once at startup and handed to every
    component that needs a path, a version or a URL.
    """

    launcher_name: str = "CraftiumClient"
    version: str = "1.0.0"

    # Runtime & Loader
    runtime_version: str = "1.21.4"
    loader_version: str = "0.15.10"
    installer_version: str = "0.11.2"
    installer_url_template: str = DEFAULT_INSTALLER_URL_TEMPLATE
    installer_file_name: str = "fabric-installer.jar"

    # Launch Settings
    java_executable: str = "java"
    min_heap: str = "1G"
    max_heap: str = "2G"
    launch_jar_name: str = "fabric-server-launch.jar"

    # Asset Policy
    redownload_assets: bool = True

    root_dir: Path = Field(default_factory=get_default_root_dir)

    class Config:
        """Pydantic model configuration."""

        frozen = True
        str_strip_whitespace = True

    @field_validator(
        "version", "runtime_version", "loader_version", "installer_version"
    )
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Versions are interpolated into URLs and arguments, so must be set."""
        if not v:
            raise ValueError("Version strings cannot be empty.")
        if "/" in v or " " in v:
            raise ValueError(f"Invalid version string: {v!r}")
        return v

    @field_validator("min_heap", "max_heap")
    @classmethod
    def validate_heap(cls, v: str) -> str:
        """Ensures heap sizes look like JVM sizes (e.g. 512M, 2G)."""
        v = v.upper()
        if not _HEAP_SIZE_PATTERN.match(v):
            raise ValueError(f"Heap size must look like '512M' or '2G', got {v!r}.")
        return v

    @field_validator("installer_url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Installer URL must be an http(s) URL.")
        try:
            v.format(runtime_version="x", loader_version="x", installer_version="x")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(
                "Installer URL may only use {runtime_version}, {loader_version} "
                f"and {{installer_version}} placeholders (got error: {e!r})."
            ) from e
        return v

    @field_validator("root_dir")
    @classmethod
    def expand_root(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def game_dir(self) -> Path:
        return self.root_dir / "game"

    @property
    def mods_dir(self) -> Path:
        return self.game_dir / "mods"

    @property
    def config_path(self) -> Path:
        return self.root_dir / "config.json"

    @property
    def settings_path(self) -> Path:
        return self.root_dir / "launcher.ini"

    @property
    def log_dir(self) -> Path:
        return self.root_dir / "logs"

    @property
    def installer_path(self) -> Path:
        return self.game_dir / self.installer_file_name

    @property
    def installer_url(self) -> str:
        """Resolves the installer download URL for the configured versions."""
        return self.installer_url_template.format(
            runtime_version=self.runtime_version,
            loader_version=self.loader_version,
            installer_version=self.installer_version,
        )

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that may appear in the INI file."""
        return set(cls.model_fields)


class LauncherConfig(BaseModel):
    """The state persisted to config.json on every successful install."""

    version: str

    class Config:
        frozen = True
