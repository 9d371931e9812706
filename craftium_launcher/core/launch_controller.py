"""
Starts the game process and watches it exit in the background.
"""

import asyncio
import logging
from pathlib import Path

from craftium_launcher.models.config import LauncherSettings
from craftium_launcher.models.session import SessionIdentity
from craftium_launcher.process.runner import ProcessRunner
from craftium_launcher.utils.structured_logger import PipelineLogger

log = logging.getLogger(__name__)


class LaunchHandle:
    """A running game process together with the task observing its exit."""

    def __init__(self, process: asyncio.subprocess.Process, watcher: asyncio.Task):
        self.process = process
        self._watcher = watcher

    @property
    def pid(self) -> int:
        return self.process.pid

    def done(self) -> bool:
        return self._watcher.done()

    async def wait(self) -> int:
        """Waits for the game to exit and returns its exit code."""
        return await asyncio.shield(self._watcher)


class LaunchController:
    """Builds the game command line and starts it, without waiting for exit."""

    def __init__(
        self,
        settings: LauncherSettings,
        runner: ProcessRunner,
        events: PipelineLogger | None = None,
    ):
        self.settings = settings
        self.runner = runner
        self.events = events

    def build_launch_args(self, game_dir: Path) -> list[str]:
        return [
            f"-Xmx{self.settings.max_heap}",
            f"-Xms{self.settings.min_heap}",
            "-jar",
            str(game_dir / self.settings.launch_jar_name),
            "nogui",
        ]

    async def launch(self, identity: SessionIdentity, game_dir: Path) -> LaunchHandle:
        """
        Starts the game for `identity` with `game_dir` as working directory.

        Raises:
            SpawnError: If the Java executable cannot be started.
        """
        log.info(f"Launching Minecraft as [bold]{identity.display_name}[/bold]...")
        process = await self.runner.start(
            self.settings.java_executable,
            self.build_launch_args(game_dir),
            game_dir,
        )
        if self.events:
            self.events.game_started(process.pid, identity.display_name)

        watcher = asyncio.create_task(
            self._watch_exit(process), name=f"game-exit-{process.pid}"
        )
        return LaunchHandle(process, watcher)

    async def _watch_exit(self, process: asyncio.subprocess.Process) -> int:
        exit_code = await process.wait()
        if exit_code == 0:
            log.info(f"Minecraft exited with code {exit_code}")
        else:
            log.warning(f"[yellow]Minecraft exited with code {exit_code}[/yellow]")
        if self.events:
            self.events.game_exited(process.pid, exit_code)
        return exit_code
