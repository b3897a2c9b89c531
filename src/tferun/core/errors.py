"""Exception hierarchy for tfe-run.

Every stage wraps the underlying cause (`raise ... from exc`) so the CLI can
print one actionable line while the full chain stays available.
"""

from __future__ import annotations


class TfeRunError(RuntimeError):
    """Base class for all errors raised by tfe-run."""


class ConfigurationError(TfeRunError):
    """Raised for invalid or missing input, before or outside remote calls."""


class AuthError(TfeRunError):
    """Raised when Terraform Cloud authentication fails."""


class ApiError(TfeRunError):
    """Raised when a Terraform Cloud API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ApiError):
    """Raised on HTTP 404, which Terraform Cloud also returns for missing permissions."""


class UploadError(TfeRunError):
    """Raised when creating, uploading or processing a configuration version fails."""


class UploadPermissionError(UploadError):
    """Raised when the configuration version can't be created (404 not found)."""


class ConfigurationVersionErroredError(UploadError):
    """Raised when Terraform Cloud reports the configuration version as errored."""

    def __init__(self, error: str | None, error_message: str | None):
        super().__init__(f"configuration version errored: {error} - {error_message}")
        self.error = error
        self.error_message = error_message


class PollTimeoutError(TfeRunError):
    """Raised when polling did not finish within its timeout.

    Timing out never cancels the remote operation, it may still be running.
    """

    def __init__(self, timeout: float, operation: str = "polling"):
        super().__init__(f"timed out after {timeout:g}s while {operation}")
        self.timeout = timeout
        self.operation = operation


class PollCancelledError(TfeRunError):
    """Raised when polling was interrupted by a cancellation signal."""

    def __init__(self, operation: str = "polling"):
        super().__init__(f"cancelled while {operation}")
        self.operation = operation


class RunError(TfeRunError):
    """Raised when creating or waiting for a run fails."""


class RunFailedError(RunError):
    """Raised when a run finished with a status that counts as failure."""

    def __init__(self, run_id: str, status: str):
        super().__init__(f"run {run_id} finished with status {status}")
        self.run_id = run_id
        self.status = status


class OutputFetchError(TfeRunError):
    """Raised when the current state or its outputs can't be retrieved."""
