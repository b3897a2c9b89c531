"""Console rendering of run progress."""

from __future__ import annotations

from tferun.cli.common.output import out


class ConsoleRunObserver:
    """
    RunObserver that prints progress through the shared console.

    Also remembers the run URL so it can still be exported when a later
    step fails.
    """

    def __init__(self) -> None:
        self.run_url: str | None = None

    def vars_file_created(self, path: str) -> None:
        out.info(f"Creating temporary variables file {path}")

    def vars_file_cleanup_failed(self, path: str, exc: OSError) -> None:
        out.warn(f"Could not remove {path}: {exc}")

    def upload_started(self, directory: str) -> None:
        out.info(f"Uploading directory {directory}...")

    def upload_finished(self) -> None:
        out.info("Done uploading.")

    def configuration_processed(self, configuration_version_id: str) -> None:
        out.success(
            f"Configuration version {configuration_version_id} is uploaded and processed."
        )

    def run_created(self, run_id: str, run_url: str) -> None:
        self.run_url = run_url
        out.success(f"Run {run_id} has been queued")
        out.kv({"View the run online": run_url})

    def wait_skipped(self, reason: str) -> None:
        out.warn(reason)

    def run_status_changed(self, status: str) -> None:
        out.info(f"Run status: {status}")
