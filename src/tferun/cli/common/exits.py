"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from tferun.cli.common.output import out


def die(msg: str, code: int = 1) -> NoReturn:
    """Print an error message and exit with `code`."""
    out.error(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """Like `die`, keeping `exc` as the cause of the exit."""
    out.error(message)
    raise typer.Exit(code) from exc
