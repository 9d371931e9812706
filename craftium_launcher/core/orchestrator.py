"""
The main orchestrator: install, fetch mods, save config, then launch.

Stages run strictly one after another. Any launcher error stops the pipeline
in the FAILED state; nothing that already happened is rolled back.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from craftium_launcher.core.launch_controller import LaunchController, LaunchHandle
from craftium_launcher.exceptions import (
    AuthenticationError,
    LauncherError,
    PipelineError,
)
from craftium_launcher.install.installation import InstallationManager
from craftium_launcher.install.manifest import AssetManifest, fetch_all
from craftium_launcher.models.config import LauncherConfig, LauncherSettings
from craftium_launcher.models.session import SessionIdentity
from craftium_launcher.net.downloader import Downloader
from craftium_launcher.process.runner import ProcessRunner
from craftium_launcher.storage.config_store import ConfigStore
from craftium_launcher.utils.structured_logger import PipelineLogger

log = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    INSTALLING = "installing"
    FETCHING_ASSETS = "fetching_assets"
    PERSISTING_CONFIG = "persisting_config"
    LAUNCHING = "launching"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """Outcome of one orchestrator run."""

    state: PipelineState
    error: LauncherError | None = None
    launch_handle: LaunchHandle | None = None
    history: list[PipelineState] = field(default_factory=list)
    fetched_assets: list[Path] = field(default_factory=list)
    duration_s: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE


class Orchestrator:
    """Sequences the install, asset, config and launch stages exactly once."""

    def __init__(
        self,
        settings: LauncherSettings,
        downloader: Downloader,
        runner: ProcessRunner | None = None,
        manifest: AssetManifest | None = None,
        installation_manager: InstallationManager | None = None,
        config_store: ConfigStore | None = None,
        launch_controller: LaunchController | None = None,
        events: PipelineLogger | None = None,
    ):
        runner = runner or ProcessRunner()
        self.settings = settings
        self.downloader = downloader
        self.manifest = manifest if manifest is not None else AssetManifest()
        self.installation_manager = installation_manager or InstallationManager(
            downloader, runner, settings.java_executable
        )
        self.config_store = config_store or ConfigStore(settings.config_path)
        self.launch_controller = launch_controller or LaunchController(
            settings, runner, events
        )
        self.events = events
        self.state = PipelineState.IDLE
        self._history = [PipelineState.IDLE]
        self._stage_started = 0.0

    def _advance(self, state: PipelineState) -> None:
        if self.events and self.state is not PipelineState.IDLE:
            self.events.stage_completed(
                self.state.value, time.monotonic() - self._stage_started
            )
        log.debug(f"Pipeline: {self.state.value} -> {state.value}")
        self.state = state
        self._history.append(state)
        self._stage_started = time.monotonic()
        if self.events and state is not PipelineState.DONE:
            self.events.stage_started(state.value)

    def _record_asset(self, result: PipelineResult, path: Path) -> None:
        result.fetched_assets.append(path)
        if self.events:
            self.events.asset_fetched(path.stem, path)

    def _fail(self, error: LauncherError) -> None:
        if self.events:
            self.events.stage_failed(self.state.value, error)
        stage = self.state.value.replace("_", " ")
        log.error(f"[red]✗ {stage} failed: {error}[/red]")
        self.state = PipelineState.FAILED
        self._history.append(PipelineState.FAILED)

    async def run(self, identity: SessionIdentity | None) -> PipelineResult:
        """
        Runs the whole pipeline for an already authenticated `identity`.

        The returned result carries the launch handle on success, or the
        error that stopped the pipeline. The game's own exit is not awaited.

        Raises:
            PipelineError: If this orchestrator has already been run.
        """
        if self.state is not PipelineState.IDLE:
            raise PipelineError("An orchestrator can only be run once.")

        start_time = time.monotonic()
        result = PipelineResult(state=PipelineState.IDLE)

        try:
            if not isinstance(identity, SessionIdentity):
                raise AuthenticationError(
                    "A signed-in session is required before launching."
                )

            self._advance(PipelineState.INSTALLING)
            state = InstallationManager.resolve_state(self.settings)
            await self.installation_manager.ensure_installed(state)

            self._advance(PipelineState.FETCHING_ASSETS)
            await fetch_all(
                self.manifest,
                self.downloader,
                self.settings.mods_dir,
                redownload=self.settings.redownload_assets,
                on_fetched=lambda path: self._record_asset(result, path),
            )

            self._advance(PipelineState.PERSISTING_CONFIG)
            self.config_store.save(LauncherConfig(version=self.settings.version))

            self._advance(PipelineState.LAUNCHING)
            result.launch_handle = await self.launch_controller.launch(
                identity, state.game_dir
            )

            self._advance(PipelineState.DONE)
        except LauncherError as e:
            self._fail(e)
            result.error = e

        result.state = self.state
        result.history = list(self._history)
        result.duration_s = time.monotonic() - start_time
        return result
