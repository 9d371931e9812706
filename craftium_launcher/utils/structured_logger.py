"""
Structured event log for launcher runs.
Writes one JSON object per line next to the regular console logging.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that emits both human-readable console lines and JSONL entries.

    Usage:
        logger = StructuredLogger("craftium_launcher", log_dir=Path("logs"))
        logger.info("asset_fetched", name="Emotes", path="/tmp/Emotes.jar")
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            log_dir: Directory for JSON log files (None = disabled)
            enable_json: Enable JSON file logging
            enable_console: Enable console output
        """
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None
        self.enable_console = enable_console

        self._logger = logging.getLogger(name)

        self._json_file = None
        self.json_log_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_log_path = log_dir / f"launcher_{timestamp}.jsonl"
            self._json_file = open(self.json_log_path, "a", encoding="utf-8")  # noqa: SIM115

        # Added to every JSON entry
        self._session_context: dict[str, Any] = {
            "run_id": f"{int(time.time())}_{id(self)}",
            "start_time": datetime.now().isoformat(),
        }

    def set_session_context(self, **kwargs) -> None:
        """Set run-level context that appears in all logs."""
        self._session_context.update(kwargs)

    def _format_message(self, event: str, **context) -> str:
        parts = [f"[{event}]"]
        for key, value in context.items():
            parts.append(f"{key}={value}")
        return " ".join(parts)

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except OSError as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _log(self, level: int, event: str, **context) -> None:
        if self.enable_console:
            self._logger.log(level, self._format_message(event, **context))
        if self.enable_json:
            self._write_json(logging.getLevelName(level), event, **context)

    def debug(self, event: str, **context) -> None:
        self._log(logging.DEBUG, event, **context)

    def info(self, event: str, **context) -> None:
        self._log(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        self._log(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        self._log(logging.ERROR, event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class PipelineLogger:
    """Specialized logger for install-and-launch pipeline events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def stage_started(self, stage: str):
        self.logger.debug("stage_started", stage=stage)

    def stage_completed(self, stage: str, duration_s: float):
        self.logger.debug(
            "stage_completed", stage=stage, duration_s=round(duration_s, 3)
        )

    def stage_failed(self, stage: str, error: Exception):
        """Log the error that moved the pipeline to its failed state."""
        self.logger.error(
            "stage_failed",
            stage=stage,
            error_type=type(error).__name__,
            error=str(error),
        )

    def asset_fetched(self, name: str, path: Path):
        self.logger.debug("asset_fetched", name=name, path=str(path))

    def game_started(self, pid: int, display_name: str):
        self.logger.info("game_started", pid=pid, display_name=display_name)

    def game_exited(self, pid: int, exit_code: int):
        level = self.logger.info if exit_code == 0 else self.logger.warning
        level("game_exited", pid=pid, exit_code=exit_code)


def create_structured_logger(
    log_dir: Path | None = None, enable_json: bool = False
) -> tuple[StructuredLogger, PipelineLogger]:
    """
    Create the structured loggers.

    Returns:
        Tuple of (base_logger, pipeline_logger)
    """
    base = StructuredLogger(
        "craftium_launcher.events", log_dir=log_dir, enable_json=enable_json
    )
    return base, PipelineLogger(base)
