"""Commands for creating runs and reading outputs on Terraform Cloud."""

import typer

from tferun.cli.common.context import build_run_context, install_cancel_handlers
from tferun.cli.common.exits import die, exit_from_exc
from tferun.cli.common.gha import in_github_actions, write_output
from tferun.cli.common.options import (
    DirectoryOpt,
    HostnameOpt,
    MessageOpt,
    OrganizationOpt,
    PrintOutputsOpt,
    ReplacementsOpt,
    RequireGhaOpt,
    TargetsOpt,
    TfVarsOpt,
    TokenOpt,
    TypeOpt,
    WaitOpt,
    WorkspaceOpt,
)
from tferun.cli.common.output import out
from tferun.cli.common.progress import ConsoleRunObserver
from tferun.core.errors import OutputFetchError, TfeRunError
from tferun.core.models import RunOptions, RunType, not_empty_or_none, split_addresses
from tferun.core.outcome import Outcome, interpret
from tferun.core.outputs import fetch_outputs
from tferun.core.runs import start_run

OUTPUT_PREFIX = "tf-"


def _export_outputs(appctx, print_outputs: bool) -> None:
    """Fetch the workspace outputs and export them as `tf-<name>` step outputs."""
    try:
        with out.status("Reading outputs from current state..."):
            outputs = fetch_outputs(appctx.adapter, appctx.workspace)
    except OutputFetchError as exc:
        exit_from_exc(exc, message=str(exc))

    if print_outputs:
        out.outputs_table(outputs)

    for name in sorted(outputs):
        write_output(f"{OUTPUT_PREFIX}{name}", outputs[name])


def run(
    token: str = TokenOpt,
    organization: str = OrganizationOpt,
    workspace: str = WorkspaceOpt,
    hostname: str = HostnameOpt,
    message: str | None = MessageOpt,
    directory: str | None = DirectoryOpt,
    run_type: str = TypeOpt,
    targets: str | None = TargetsOpt,
    replacements: str | None = ReplacementsOpt,
    wait_for_completion: bool = WaitOpt,
    print_outputs: bool = PrintOutputsOpt,
    tf_vars: str | None = TfVarsOpt,
    require_github_actions: bool = RequireGhaOpt,
):
    """
    Upload a directory and create a run on a Terraform Cloud workspace.
    """
    if require_github_actions and not in_github_actions():
        die("tfe-run should only be run within GitHub Actions")

    try:
        parsed_type = RunType.parse(run_type)
    except ValueError as e:
        die(str(e), code=1)

    options = RunOptions(
        type=parsed_type,
        message=not_empty_or_none(message),
        directory=not_empty_or_none(directory),
        target_addrs=split_addresses(targets),
        replace_addrs=split_addresses(replacements),
        wait_for_completion=wait_for_completion,
        tf_vars=not_empty_or_none(tf_vars),
    )

    appctx = build_run_context(token, hostname, organization, workspace)
    cancel = install_cancel_handlers()
    observer = ConsoleRunObserver()

    try:
        output = start_run(
            appctx.adapter,
            appctx.workspace,
            options,
            hostname=appctx.hostname,
            observer=observer,
            cancel=cancel,
        )
    except TfeRunError as exc:
        # The run may exist even though waiting for it failed.
        if observer.run_url:
            write_output("run-url", observer.run_url)
        exit_from_exc(exc, message=f"Error: {exc}")

    write_output("run-url", output.run_url)
    if output.has_changes is not None:
        write_output("has-changes", "true" if output.has_changes else "false")
    if output.raw_status:
        write_output("run-status", output.raw_status)

    if output.status is not None:
        result = interpret(output.status, output.raw_status)
        if result.outcome == Outcome.SOFT_FAILED:
            out.warn(result.reason)
        else:
            out.success(result.reason)

    if cancel.is_set():
        die("Cancelled before reading outputs, the run keeps going on Terraform Cloud.")

    _export_outputs(appctx, print_outputs)


def outputs(
    token: str = TokenOpt,
    organization: str = OrganizationOpt,
    workspace: str = WorkspaceOpt,
    hostname: str = HostnameOpt,
    print_outputs: bool = PrintOutputsOpt,
):
    """
    Export the outputs of the current state of a workspace without starting a run.
    """
    appctx = build_run_context(token, hostname, organization, workspace)
    _export_outputs(appctx, print_outputs)
