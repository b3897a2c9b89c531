"""Progress reporting interface for the core.

The core never prints. Upload and run operations report state changes to a
RunObserver; frontends decide how to render them.
"""

from __future__ import annotations

from typing import Protocol


class RunObserver(Protocol):
    """Receives progress events from the upload coordinator and run driver."""

    def vars_file_created(self, path: str) -> None:
        """A temporary variables file was written."""
        ...

    def vars_file_cleanup_failed(self, path: str, exc: OSError) -> None:
        """The temporary variables file could not be removed."""
        ...

    def upload_started(self, directory: str) -> None:
        """Uploading the configuration directory started."""
        ...

    def upload_finished(self) -> None:
        """The configuration directory was uploaded."""
        ...

    def configuration_processed(self, configuration_version_id: str) -> None:
        """Terraform Cloud finished processing the configuration version."""
        ...

    def run_created(self, run_id: str, run_url: str) -> None:
        """A run has been queued."""
        ...

    def wait_skipped(self, reason: str) -> None:
        """Waiting for completion was requested but will not happen."""
        ...

    def run_status_changed(self, status: str) -> None:
        """The run moved to a new status (human readable)."""
        ...


class NullObserver:
    """Observer that ignores all events."""

    def vars_file_created(self, path: str) -> None:
        pass

    def vars_file_cleanup_failed(self, path: str, exc: OSError) -> None:
        pass

    def upload_started(self, directory: str) -> None:
        pass

    def upload_finished(self) -> None:
        pass

    def configuration_processed(self, configuration_version_id: str) -> None:
        pass

    def run_created(self, run_id: str, run_url: str) -> None:
        pass

    def wait_skipped(self, reason: str) -> None:
        pass

    def run_status_changed(self, status: str) -> None:
        pass
