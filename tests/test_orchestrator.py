"""End-to-end and gating tests for the install-and-launch orchestrator."""

import json
import os

import pytest
from helpers import FakeDownloader, FakeRunner

from craftium_launcher.core.orchestrator import Orchestrator, PipelineState
from craftium_launcher.exceptions import (
    AuthenticationError,
    FetchError,
    LauncherIOError,
    PipelineError,
    SpawnError,
)
from craftium_launcher.install.manifest import AssetManifest
from craftium_launcher.models.assets import Asset
from craftium_launcher.models.config import LauncherConfig, LauncherSettings
from craftium_launcher.net.downloader import Downloader
from craftium_launcher.process.runner import ProcessRunner

X_MANIFEST = AssetManifest([Asset(name="X", source_url="http://h/x")])


class FailingConfigStore:
    def save(self, config: LauncherConfig) -> None:
        raise LauncherIOError("/ro/config.json", "permission", "read-only")


def _orchestrator(settings, downloader, runner, **kwargs):
    kwargs.setdefault("manifest", X_MANIFEST)
    return Orchestrator(settings, downloader, runner=runner, **kwargs)


async def test_end_to_end_example(settings, identity):
    downloader = FakeDownloader()
    runner = FakeRunner()

    result = await _orchestrator(settings, downloader, runner).run(identity)

    assert result.state is PipelineState.DONE
    assert result.error is None
    assert result.history == [
        PipelineState.IDLE,
        PipelineState.INSTALLING,
        PipelineState.FETCHING_ASSETS,
        PipelineState.PERSISTING_CONFIG,
        PipelineState.LAUNCHING,
        PipelineState.DONE,
    ]

    assert settings.game_dir.is_dir()
    assert downloader.calls == [
        (settings.installer_url, settings.installer_path),
        ("http://h/x", settings.mods_dir / "X.jar"),
    ]

    install_args = runner.runs[0][1]
    assert "1.21.4" in install_args
    assert "0.15.10" in install_args

    assert (settings.mods_dir / "X.jar").is_file()
    assert result.fetched_assets == [settings.mods_dir / "X.jar"]
    assert json.loads(settings.config_path.read_text()) == {"version": "1.0.0"}

    _, launch_args, working_dir = runner.starts[0]
    assert launch_args[:2] == ["-Xmx2G", "-Xms1G"]
    assert launch_args[-1] == "nogui"
    assert working_dir == settings.game_dir
    assert await result.launch_handle.wait() == 0


async def test_second_pipeline_reuses_installer_but_refetches_assets(
    settings, identity
):
    downloader = FakeDownloader()
    await _orchestrator(settings, downloader, FakeRunner()).run(identity)

    second = FakeDownloader()
    result = await _orchestrator(settings, second, FakeRunner()).run(identity)

    assert result.succeeded
    assert [url for url, _ in second.calls] == ["http://h/x"]


async def test_keep_existing_policy_is_honoured(tmp_path, identity):
    settings = LauncherSettings(root_dir=tmp_path, redownload_assets=False)
    await _orchestrator(settings, FakeDownloader(), FakeRunner()).run(identity)

    second = FakeDownloader()
    result = await _orchestrator(settings, second, FakeRunner()).run(identity)

    assert result.succeeded
    assert second.fetch_count == 0
    assert result.fetched_assets == []


async def test_does_not_wait_for_game_exit(settings, identity):
    runner = FakeRunner(auto_exit=False)

    result = await _orchestrator(settings, FakeDownloader(), runner).run(identity)

    assert result.state is PipelineState.DONE
    assert not result.launch_handle.done()
    runner.processes[0].exited.set()
    await result.launch_handle.wait()


class TestLaunchGating:
    async def test_installer_download_failure(self, settings, identity):
        error = FetchError(settings.installer_url, "http-status", status_code=404)
        downloader = FakeDownloader(fail_urls={settings.installer_url: error})
        runner = FakeRunner()

        result = await _orchestrator(settings, downloader, runner).run(identity)

        assert result.state is PipelineState.FAILED
        assert result.error is error
        assert result.history[-2:] == [PipelineState.INSTALLING, PipelineState.FAILED]
        assert runner.runs == []
        assert runner.starts == []
        assert not settings.config_path.exists()

    async def test_installer_non_zero_exit(self, settings, identity):
        downloader = FakeDownloader()
        runner = FakeRunner(exit_code=1)

        result = await _orchestrator(settings, downloader, runner).run(identity)

        assert result.state is PipelineState.FAILED
        assert result.error.reason == "non-zero-exit"
        assert downloader.fetch_count == 1
        assert runner.starts == []

    async def test_asset_failure(self, settings, identity):
        manifest = AssetManifest(
            [
                Asset(name="A", source_url="http://h/a"),
                Asset(name="B", source_url="http://h/b"),
                Asset(name="C", source_url="http://h/c"),
            ]
        )
        error = FetchError("http://h/b", "transport", detail="reset")
        downloader = FakeDownloader(fail_urls={"http://h/b": error})
        runner = FakeRunner()

        result = await _orchestrator(
            settings, downloader, runner, manifest=manifest
        ).run(identity)

        assert result.state is PipelineState.FAILED
        assert result.error is error
        assert "http://h/c" not in [url for url, _ in downloader.calls]
        assert (settings.mods_dir / "A.jar").is_file()
        assert result.fetched_assets == [settings.mods_dir / "A.jar"]
        assert not settings.config_path.exists()
        assert runner.starts == []

    async def test_config_save_failure(self, settings, identity):
        runner = FakeRunner()

        result = await _orchestrator(
            settings, FakeDownloader(), runner, config_store=FailingConfigStore()
        ).run(identity)

        assert result.state is PipelineState.FAILED
        assert isinstance(result.error, LauncherIOError)
        assert result.history[-2] is PipelineState.PERSISTING_CONFIG
        assert runner.starts == []

    async def test_missing_identity_fails_before_any_work(self, settings):
        downloader = FakeDownloader()
        runner = FakeRunner()

        result = await _orchestrator(settings, downloader, runner).run(None)

        assert result.state is PipelineState.FAILED
        assert isinstance(result.error, AuthenticationError)
        assert result.history == [PipelineState.IDLE, PipelineState.FAILED]
        assert downloader.fetch_count == 0
        assert runner.runs == []
        assert not settings.game_dir.exists()


async def test_orchestrator_runs_only_once(settings, identity):
    orchestrator = _orchestrator(settings, FakeDownloader(), FakeRunner())
    await orchestrator.run(identity)

    with pytest.raises(PipelineError):
        await orchestrator.run(identity)


class TestRealComponentFailures:
    """Errors raised by the real runner and downloader still end in FAILED."""

    async def test_missing_java_fails_pipeline(self, tmp_path, identity):
        settings = LauncherSettings(
            root_dir=tmp_path, java_executable=str(tmp_path / "no-such-java")
        )
        orchestrator = Orchestrator(
            settings, FakeDownloader(), runner=ProcessRunner(), manifest=X_MANIFEST
        )

        result = await orchestrator.run(identity)

        assert result.state is PipelineState.FAILED
        assert isinstance(result.error, SpawnError)
        assert result.error.reason == "not-found"
        assert result.history[-2] is PipelineState.INSTALLING
        assert not settings.config_path.exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX execute permissions")
    async def test_unexecutable_java_fails_pipeline(self, tmp_path, identity):
        garbage = tmp_path / "java"
        garbage.write_bytes(b"\x00\x01\x02 not a real binary")
        garbage.chmod(0o755)
        settings = LauncherSettings(
            root_dir=tmp_path / "root", java_executable=str(garbage)
        )
        orchestrator = Orchestrator(
            settings, FakeDownloader(), runner=ProcessRunner(), manifest=X_MANIFEST
        )

        result = await orchestrator.run(identity)

        assert result.state is PipelineState.FAILED
        assert isinstance(result.error, SpawnError)
        assert result.error.reason == "exec-failed"

    async def test_unreachable_installer_url_fails_pipeline(self, tmp_path, identity):
        settings = LauncherSettings(
            root_dir=tmp_path,
            installer_url_template="http://127.0.0.1:1/{loader_version}/installer.jar",
        )
        runner = FakeRunner()

        async with Downloader() as downloader:
            result = await Orchestrator(
                settings, downloader, runner=runner, manifest=X_MANIFEST
            ).run(identity)

        assert result.state is PipelineState.FAILED
        assert isinstance(result.error, FetchError)
        assert result.error.reason == "transport"
        assert runner.runs == []
        assert runner.starts == []
