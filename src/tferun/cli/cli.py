"""CLI application for creating Terraform Cloud runs."""

import typer

from tferun.cli.commands.run import outputs, run

app = typer.Typer(
    help="tfe-run - create and follow runs on Terraform Cloud",
    no_args_is_help=True,
)

app.command("run", help="Upload configuration and start a plan, apply or destroy run.")(run)
app.command("outputs", help="Export outputs of the current workspace state.")(outputs)


if __name__ == "__main__":
    app()
