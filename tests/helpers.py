"""Test doubles for the downloader and process runner."""

from __future__ import annotations

import asyncio
from pathlib import Path

from craftium_launcher.exceptions import FetchError
from craftium_launcher.models.assets import ProcessResult


class FakeDownloader:
    """Records fetches in order and writes a small body to each destination."""

    def __init__(self, fail_urls: dict[str, FetchError] | None = None):
        self.fail_urls = fail_urls or {}
        self.calls: list[tuple[str, Path]] = []
        self.events: list[str] = []

    @property
    def fetch_count(self) -> int:
        return len(self.calls)

    async def fetch(self, url: str, destination_path: Path) -> None:
        self.calls.append((url, destination_path))
        self.events.append(f"start:{url}")
        await asyncio.sleep(0)
        try:
            if url in self.fail_urls:
                raise self.fail_urls[url]
            destination_path.write_text(f"fetched {url} #{len(self.calls)}")
        finally:
            self.events.append(f"end:{url}")


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(self, pid: int = 4242, exit_code: int = 0):
        self.pid = pid
        self.exit_code = exit_code
        self.exited = asyncio.Event()

    async def wait(self) -> int:
        await self.exited.wait()
        return self.exit_code


class FakeRunner:
    """Records process invocations instead of spawning anything."""

    def __init__(self, exit_code: int = 0, auto_exit: bool = True):
        self.exit_code = exit_code
        self.auto_exit = auto_exit
        self.runs: list[tuple[str, list[str], Path]] = []
        self.starts: list[tuple[str, list[str], Path]] = []
        self.processes: list[FakeProcess] = []

    async def run(self, executable, args, working_dir) -> ProcessResult:
        self.runs.append((executable, list(args), working_dir))
        return ProcessResult(exit_code=self.exit_code)

    async def start(self, executable, args, working_dir) -> FakeProcess:
        self.starts.append((executable, list(args), working_dir))
        process = FakeProcess(pid=4242 + len(self.processes))
        if self.auto_exit:
            process.exited.set()
        self.processes.append(process)
        return process
