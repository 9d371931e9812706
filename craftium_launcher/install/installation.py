"""
Makes sure the Fabric loader is installed into the game directory.
"""

import asyncio
import logging

from craftium_launcher.exceptions import SpawnError
from craftium_launcher.models.assets import InstallationState, ProcessResult
from craftium_launcher.models.config import LauncherSettings
from craftium_launcher.net.downloader import Downloader
from craftium_launcher.process.runner import ProcessRunner
from craftium_launcher.utils.path import create_dir

log = logging.getLogger(__name__)


class InstallationManager:
    """Downloads the installer when missing and runs it against the game directory."""

    def __init__(
        self,
        downloader: Downloader,
        runner: ProcessRunner,
        java_executable: str = "java",
    ):
        self.downloader = downloader
        self.runner = runner
        self.java_executable = java_executable

    @staticmethod
    def resolve_state(settings: LauncherSettings) -> InstallationState:
        """Resolves versions, paths and the installer URL from settings."""
        return InstallationState(
            runtime_version=settings.runtime_version,
            loader_version=settings.loader_version,
            installer_path=settings.installer_path,
            installer_url=settings.installer_url,
            game_dir=settings.game_dir,
        )

    @staticmethod
    def build_installer_args(state: InstallationState) -> list[str]:
        return [
            "-jar",
            str(state.installer_path),
            "server",
            "-mcversion",
            state.runtime_version,
            "-loader",
            state.loader_version,
            "-dir",
            str(state.game_dir),
        ]

    async def ensure_installed(self, state: InstallationState) -> ProcessResult:
        """
        Installs the loader described by `state`.

        The game directory is created first. The installer is only downloaded
        when no file exists at `state.installer_path`; an existing file is
        trusted as-is. The installer is then always run.

        Raises:
            FetchError: If the installer download fails.
            SpawnError: If the installer cannot start or exits non-zero.
            LauncherIOError: If the game directory cannot be created.
        """
        create_dir(state.game_dir)
        log.info(
            f"Setting up Minecraft [cyan]{state.runtime_version}[/cyan] with "
            f"Fabric [cyan]{state.loader_version}[/cyan]..."
        )

        installer_exists = await asyncio.to_thread(state.installer_path.is_file)
        if installer_exists:
            log.debug(f"Installer already present at '{state.installer_path}'.")
        else:
            log.info("Downloading Fabric installer...")
            await self.downloader.fetch(state.installer_url, state.installer_path)

        log.info("Installing Fabric...")
        result = await self.runner.run(
            self.java_executable,
            self.build_installer_args(state),
            state.game_dir,
        )
        if not result.succeeded:
            raise SpawnError(
                self.java_executable, "non-zero-exit", exit_code=result.exit_code
            )
        return result
