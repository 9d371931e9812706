"""
Defines custom exceptions for the launcher to allow for more specific error handling.
"""


class LauncherError(Exception):
    """Base exception for all launcher-specific errors."""


class FetchError(LauncherError):
    """
    Raised when a remote resource cannot be downloaded.

    `reason` is either "transport" (connection-level failure) or "http-status"
    (the server answered with a non-success status, stored in `status_code`).
    """

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        self.detail = detail
        if reason == "http-status":
            message = f"Failed to get '{url}' ({status_code})"
        else:
            message = f"Failed to get '{url}': {detail or 'transport error'}"
        super().__init__(message)


class SpawnError(LauncherError):
    """
    Raised when an external executable cannot be started or exits unsuccessfully.

    `reason` is one of "not-found", "permission", "exec-failed" or
    "non-zero-exit".
    """

    def __init__(
        self,
        executable: str,
        reason: str,
        exit_code: int | None = None,
        detail: str | None = None,
    ):
        self.executable = executable
        self.reason = reason
        self.exit_code = exit_code
        self.detail = detail
        if reason == "non-zero-exit":
            message = f"'{executable}' exited with code {exit_code}"
        elif reason == "permission":
            message = f"Permission denied when starting '{executable}'"
        elif reason == "exec-failed":
            message = f"Could not execute '{executable}': {detail}"
        else:
            message = f"Executable '{executable}' was not found"
        super().__init__(message)


class LauncherIOError(LauncherError):
    """Raised when a local file cannot be written ("permission" or "path")."""

    def __init__(self, path: str, reason: str, detail: str | None = None):
        self.path = path
        self.reason = reason
        self.detail = detail
        super().__init__(f"Could not write '{path}' ({reason}): {detail}")


class ConfigurationError(LauncherError):
    """Raised for issues related to settings loading or validation."""


class AuthenticationError(LauncherError):
    """Raised when no valid session identity is available."""


class PipelineError(LauncherError):
    """Raised when the orchestrator is used outside its allowed lifecycle."""
