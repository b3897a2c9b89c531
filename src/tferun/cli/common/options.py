"""Common CLI options for the CLI.

Every option also reads the environment variable GitHub Actions sets for the
matching action input (INPUT_<NAME>, hyphens preserved).
"""

import typer

TokenOpt = typer.Option(
    ...,
    "--token",
    envvar=["INPUT_TOKEN", "TFE_TOKEN"],
    help="Terraform Cloud user or team API token",
    show_default=False,
)

OrganizationOpt = typer.Option(
    ...,
    "--organization",
    "-o",
    envvar="INPUT_ORGANIZATION",
    help="Name of the organization on Terraform Cloud",
)

WorkspaceOpt = typer.Option(
    ...,
    "--workspace",
    "-w",
    envvar="INPUT_WORKSPACE",
    help="Name of the workspace on Terraform Cloud",
)

HostnameOpt = typer.Option(
    "app.terraform.io",
    "--hostname",
    envvar=["INPUT_HOSTNAME", "TFE_HOSTNAME"],
    help="Terraform Cloud or Terraform Enterprise hostname",
)

MessageOpt = typer.Option(
    None,
    "--message",
    "-m",
    envvar="INPUT_MESSAGE",
    help="Message to use as name of the run",
)

DirectoryOpt = typer.Option(
    None,
    "--directory",
    "-d",
    envvar="INPUT_DIRECTORY",
    help="Directory to upload, defaults to the current directory",
)

TypeOpt = typer.Option(
    "apply",
    "--type",
    "-t",
    envvar="INPUT_TYPE",
    help="Type of run: plan, apply or destroy",
)

TargetsOpt = typer.Option(
    None,
    "--targets",
    envvar="INPUT_TARGETS",
    help="Resource addresses to target, separated by newlines",
)

ReplacementsOpt = typer.Option(
    None,
    "--replacements",
    envvar="INPUT_REPLACEMENTS",
    help="Resource addresses to replace, separated by newlines",
)

WaitOpt = typer.Option(
    True,
    "--wait-for-completion/--no-wait-for-completion",
    envvar="INPUT_WAIT-FOR-COMPLETION",
    help="Wait until the run is finished (skipped for non-plan runs without auto-apply)",
)

PrintOutputsOpt = typer.Option(
    True,
    "--print-outputs/--no-print-outputs",
    envvar="INPUT_PRINT-OUTPUTS",
    help="Print Terraform outputs from the current state",
)

TfVarsOpt = typer.Option(
    None,
    "--tf-vars",
    envvar="INPUT_TF-VARS",
    help="Contents of a temporary run.auto.tfvars file",
)

RequireGhaOpt = typer.Option(
    False,
    "--require-github-actions/--no-require-github-actions",
    envvar="TFE_RUN_REQUIRE_GHA",
    help="Refuse to run outside of GitHub Actions",
)
