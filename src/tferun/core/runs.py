"""Core run execution and monitoring logic.

This module drives a single run on Terraform Cloud: it uploads the
configuration, creates the run against the processed configuration version
and, when that is safe, waits until the run reaches a terminal status. The
functionality here is synchronous and infrastructure-agnostic, relying on
adapters to communicate with Terraform Cloud and on an observer to report
progress.
"""

from __future__ import annotations

import threading
from typing import Protocol

from tferun.core.errors import ApiError, PollCancelledError, RunError, RunFailedError
from tferun.core.models import (
    ConfigurationVersion,
    Run,
    RunOptions,
    RunOutput,
    RunType,
    Workspace,
    pretty_status,
)
from tferun.core.observer import NullObserver, RunObserver
from tferun.core.outcome import interpret
from tferun.core.poller import poll
from tferun.core.upload import (
    UPLOAD_POLL_INTERVAL,
    UPLOAD_TIMEOUT,
    ConfigurationVersionsAdapter,
    upload_configuration,
)

DEFAULT_HOSTNAME = "app.terraform.io"

RUN_POLL_INTERVAL = 5.0
RUN_TIMEOUT = 60 * 60.0


class RunsAdapter(Protocol):
    """Interface for creating runs and querying their status."""

    def create_run(
        self,
        workspace_id: str,
        configuration_version_id: str,
        *,
        is_destroy: bool,
        message: str | None = None,
        target_addrs: tuple[str, ...] | None = None,
        replace_addrs: tuple[str, ...] | None = None,
    ) -> Run:
        """Create a run and return it."""
        ...

    def read_run(self, run_id: str) -> Run:
        """Return the current state of a run."""
        ...


class TerraformRunAdapter(ConfigurationVersionsAdapter, RunsAdapter, Protocol):
    """Everything needed to upload configuration and drive a run."""


def run_url(hostname: str, workspace: Workspace, run_id: str) -> str:
    """Return the browser URL of a run."""
    return (
        f"https://{hostname}/app/{workspace.organization}"
        f"/workspaces/{workspace.name}/runs/{run_id}"
    )


def create_run(
    adapter: RunsAdapter,
    workspace: Workspace,
    configuration_version: ConfigurationVersion,
    options: RunOptions,
) -> Run:
    """
    Create a run for a processed configuration version.

    Empty target or replace lists are sent as "not set", never as an empty
    list.
    """
    try:
        return adapter.create_run(
            workspace.id,
            configuration_version.id,
            is_destroy=options.type == RunType.DESTROY,
            message=options.message or None,
            target_addrs=options.target_addrs or None,
            replace_addrs=options.replace_addrs or None,
        )
    except ApiError as exc:
        raise RunError(f"could not create run: {exc}") from exc


def should_wait(options: RunOptions, workspace: Workspace) -> tuple[bool, str | None]:
    """
    Decide whether to block until the run is finished.

    A non-speculative run on a workspace without auto-apply can wait for a
    manual confirmation forever, even a run without changes can be stuck
    behind an earlier run that awaits confirmation. Speculative plans can
    always continue.

    Returns:
        (wait, reason) where reason explains a skipped wait.
    """
    if not options.wait_for_completion:
        return False, None
    if options.type != RunType.PLAN and not workspace.auto_apply:
        return False, "Auto apply isn't enabled, won't wait for completion."
    return True, None


def wait_for_run(
    adapter: RunsAdapter,
    run: Run,
    *,
    observer: RunObserver | None = None,
    cancel: threading.Event | None = None,
    poll_interval: float = RUN_POLL_INTERVAL,
    timeout: float = RUN_TIMEOUT,
) -> Run:
    """
    Block until a run reaches a terminal status.

    Every distinct status is reported to the observer once, repeated
    observations of the same status are not.

    Returns:
        The run as last read, with a terminal status.
    """
    observer = observer or NullObserver()
    latest = run
    prev_status: str | None = None

    def _finished() -> bool:
        nonlocal latest, prev_status
        try:
            latest = adapter.read_run(run.id)
        except ApiError as exc:
            raise RunError(f"could not read run: {exc}") from exc

        if latest.raw_status != prev_status:
            observer.run_status_changed(pretty_status(latest.raw_status))
            prev_status = latest.raw_status

        return latest.status.is_terminal

    poll(
        _finished,
        interval=poll_interval,
        timeout=timeout,
        cancel=cancel,
        operation=f"waiting for completion of run {run.id}",
    )
    return latest


def start_run(
    adapter: TerraformRunAdapter,
    workspace: Workspace,
    options: RunOptions,
    *,
    hostname: str = DEFAULT_HOSTNAME,
    observer: RunObserver | None = None,
    cancel: threading.Event | None = None,
    upload_poll_interval: float = UPLOAD_POLL_INTERVAL,
    upload_timeout: float = UPLOAD_TIMEOUT,
    run_poll_interval: float = RUN_POLL_INTERVAL,
    run_timeout: float = RUN_TIMEOUT,
) -> RunOutput:
    """
    Upload the configuration and create a new run on Terraform Cloud.

    If `options.wait_for_completion` is set this blocks until the run is
    finished, except if the run is non-speculative and the workspace has
    disabled auto-apply. Timing out does not cancel the remote run.

    Args:
        adapter: Adapter used to talk to Terraform Cloud.
        workspace: Workspace to run in.
        options: Run options.
        hostname: Terraform Cloud/Enterprise hostname, used for the run URL.
        observer: Receives progress events.
        cancel: Event that interrupts any wait.

    Returns:
        RunOutput with the run URL, plus status and has_changes when
        completion was observed.

    Raises:
        RunFailedError: The run finished with a failure status.
        TfeRunError: Any other failure while uploading, creating or waiting.
    """
    observer = observer or NullObserver()

    cv = upload_configuration(
        adapter,
        workspace,
        directory=options.directory,
        run_type=options.type,
        tf_vars=options.tf_vars,
        observer=observer,
        cancel=cancel,
        poll_interval=upload_poll_interval,
        timeout=upload_timeout,
    )

    if cancel is not None and cancel.is_set():
        raise PollCancelledError("creating the run")

    run = create_run(adapter, workspace, cv, options)
    url = run_url(hostname, workspace, run.id)
    observer.run_created(run.id, url)

    wait, reason = should_wait(options, workspace)
    if not wait:
        if reason:
            observer.wait_skipped(reason)
        return RunOutput(run_url=url)

    run = wait_for_run(
        adapter,
        run,
        observer=observer,
        cancel=cancel,
        poll_interval=run_poll_interval,
        timeout=run_timeout,
    )

    result = interpret(run.status, run.raw_status)
    if result.failed:
        raise RunFailedError(run.id, result.reason)

    return RunOutput(
        run_url=url,
        has_changes=run.has_changes,
        status=run.status,
        raw_status=run.raw_status,
    )
