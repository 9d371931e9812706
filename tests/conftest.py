"""Shared fixtures for the launcher test-suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeDownloader, FakeRunner

from craftium_launcher.models.config import LauncherSettings
from craftium_launcher.models.session import SessionIdentity


@pytest.fixture
def settings(tmp_path: Path) -> LauncherSettings:
    return LauncherSettings(root_dir=tmp_path / "craftium")


@pytest.fixture
def identity() -> SessionIdentity:
    return SessionIdentity(
        display_name="Player", unique_id="player_uuid", access_token="mock_token"
    )


@pytest.fixture
def fake_downloader() -> FakeDownloader:
    return FakeDownloader()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture(autouse=True)
def _isolated_home(monkeypatch: pytest.MonkeyPatch, tmp_path_factory):
    """Keep tests from ever touching the real ~/.craftiumclient."""
    monkeypatch.setenv("CRAFTIUM_HOME", str(tmp_path_factory.mktemp("home")))
