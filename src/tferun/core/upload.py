"""Configuration upload logic.

Creates a configuration version for a workspace, uploads a local directory
into it and blocks until Terraform Cloud has processed the upload. Runs are
never queued automatically by the configuration version: the run driver
creates the run itself so it can set the message, targets and destroy flag.
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from typing import Iterator, Protocol

from tferun.core.errors import (
    ApiError,
    ConfigurationError,
    ConfigurationVersionErroredError,
    NotFoundError,
    UploadError,
    UploadPermissionError,
)
from tferun.core.models import (
    ConfigurationStatus,
    ConfigurationVersion,
    RunType,
    Workspace,
)
from tferun.core.observer import NullObserver, RunObserver
from tferun.core.poller import poll

DEFAULT_DIRECTORY = "./"
VARS_FILE_NAME = "run.auto.tfvars"

UPLOAD_POLL_INTERVAL = 5.0
UPLOAD_TIMEOUT = 10 * 60.0


class ConfigurationVersionsAdapter(Protocol):
    """Interface for configuration version operations."""

    def create_configuration_version(
        self, workspace_id: str, *, auto_queue_runs: bool, speculative: bool
    ) -> ConfigurationVersion:
        """Create a new configuration version and return it (status pending)."""
        ...

    def upload_configuration(self, upload_url: str, directory: str) -> None:
        """Package and upload `directory` to the configuration version."""
        ...

    def read_configuration_version(self, configuration_version_id: str) -> ConfigurationVersion:
        """Return the current state of a configuration version."""
        ...


@contextmanager
def temporary_vars_file(
    path: str, content: str, observer: RunObserver
) -> Iterator[str]:
    """
    Write `content` to `path` for the duration of the block.

    The file is removed on every exit path. A failing removal is reported to
    the observer and never replaces an exception raised inside the block.
    """
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        raise ConfigurationError(f"could not create {VARS_FILE_NAME}: {exc}") from exc

    observer.vars_file_created(path)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except OSError as exc:
            observer.vars_file_cleanup_failed(path, exc)


def vars_file_path(workspace: Workspace, directory: str) -> str:
    """Location of the temporary variables file inside the upload directory."""
    return os.path.join(directory, workspace.working_directory or "", VARS_FILE_NAME)


def upload_configuration(
    adapter: ConfigurationVersionsAdapter,
    workspace: Workspace,
    *,
    directory: str | None = None,
    run_type: RunType = RunType.APPLY,
    tf_vars: str | None = None,
    observer: RunObserver | None = None,
    cancel: threading.Event | None = None,
    poll_interval: float = UPLOAD_POLL_INTERVAL,
    timeout: float = UPLOAD_TIMEOUT,
) -> ConfigurationVersion:
    """
    Upload a directory as a new configuration version and wait until it is processed.

    Args:
        adapter: Adapter used to talk to Terraform Cloud.
        workspace: Workspace the configuration version belongs to.
        directory: Directory to upload, defaults to the current directory.
        run_type: A plan creates a speculative configuration version.
        tf_vars: Optional contents of a temporary `run.auto.tfvars` file,
            written into the workspace working directory before uploading.
        observer: Receives progress events.
        cancel: Event that interrupts waiting for processing.
        poll_interval: Seconds between status checks.
        timeout: Maximum seconds to wait for processing.

    Returns:
        The processed configuration version.

    Raises:
        ConfigurationError: `directory` is not a directory, or the variables
            file could not be written.
        UploadPermissionError: Creating the configuration version returned 404.
        UploadError: Creating, uploading or reading the version failed.
        ConfigurationVersionErroredError: Terraform Cloud rejected the upload.
        PollTimeoutError: Processing took longer than `timeout`.
        PollCancelledError: `cancel` was set while waiting.
    """
    observer = observer or NullObserver()
    directory = directory or DEFAULT_DIRECTORY
    if not os.path.isdir(directory):
        raise ConfigurationError(f"directory '{directory}' does not exist or is not a directory")

    try:
        cv = adapter.create_configuration_version(
            workspace.id,
            auto_queue_runs=False,
            speculative=run_type == RunType.PLAN,
        )
    except NotFoundError as exc:
        raise UploadPermissionError(
            "could not create configuration version (404 not found), this might "
            "happen if you are not using a user or team API token"
        ) from exc
    except ApiError as exc:
        raise UploadError(f"could not create a new configuration version: {exc}") from exc

    if not cv.upload_url:
        raise UploadError(f"configuration version {cv.id} has no upload URL")

    if tf_vars is not None:
        with temporary_vars_file(vars_file_path(workspace, directory), tf_vars, observer):
            _upload(adapter, cv.upload_url, directory, observer)
    else:
        _upload(adapter, cv.upload_url, directory, observer)

    latest = cv

    def _processed() -> bool:
        nonlocal latest
        try:
            latest = adapter.read_configuration_version(cv.id)
        except ApiError as exc:
            raise UploadError(f"could not get current configuration version: {exc}") from exc
        if latest.status == ConfigurationStatus.ERRORED:
            raise ConfigurationVersionErroredError(latest.error, latest.error_message)
        return latest.status == ConfigurationStatus.UPLOADED

    poll(
        _processed,
        interval=poll_interval,
        timeout=timeout,
        cancel=cancel,
        operation="waiting for the configuration version to be processed",
    )

    observer.configuration_processed(latest.id)
    return latest


def _upload(
    adapter: ConfigurationVersionsAdapter,
    upload_url: str,
    directory: str,
    observer: RunObserver,
) -> None:
    observer.upload_started(directory)
    try:
        adapter.upload_configuration(upload_url, directory)
    except (ApiError, OSError) as exc:
        raise UploadError(f"could not upload directory '{directory}': {exc}") from exc
    observer.upload_finished()
