"""
Runs external executables with the operator's terminal attached.
"""

import asyncio
import logging
from pathlib import Path

from craftium_launcher.exceptions import LauncherIOError, SpawnError
from craftium_launcher.models.assets import ProcessResult

log = logging.getLogger(__name__)


class ProcessRunner:
    """
    Spawns child processes that inherit stdin, stdout and stderr.

    A non-zero exit code is returned to the caller as a ProcessResult; only a
    failure to start the executable raises.
    """

    async def start(
        self, executable: str, args: list[str], working_dir: Path
    ) -> asyncio.subprocess.Process:
        """
        Starts `executable` without waiting for it to finish.

        Raises:
            LauncherIOError: If `working_dir` is not an existing directory.
            SpawnError: If the executable is missing, not permitted, or cannot
                be executed (e.g. not a valid binary).
        """
        if not await asyncio.to_thread(working_dir.is_dir):
            raise LauncherIOError(
                str(working_dir), "path", "working directory does not exist"
            )

        log.debug(f"Running: {executable} {' '.join(args)} (cwd={working_dir})")
        try:
            return await asyncio.create_subprocess_exec(
                executable,
                *args,
                cwd=str(working_dir),
                stdin=None,
                stdout=None,
                stderr=None,
            )
        except FileNotFoundError as e:
            raise SpawnError(executable, "not-found") from e
        except PermissionError as e:
            raise SpawnError(executable, "permission") from e
        except OSError as e:
            raise SpawnError(executable, "exec-failed", detail=str(e)) from e

    async def run(
        self, executable: str, args: list[str], working_dir: Path
    ) -> ProcessResult:
        """Starts `executable` and waits for it to exit."""
        process = await self.start(executable, args, working_dir)
        exit_code = await process.wait()
        log.debug(f"'{executable}' exited with code {exit_code}.")
        return ProcessResult(exit_code=exit_code)
