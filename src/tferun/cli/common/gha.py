"""GitHub Actions integration: detecting the runner and writing step outputs."""

from __future__ import annotations

import os
import uuid

import typer


def in_github_actions() -> bool:
    """Return True when running inside a GitHub Actions job."""
    return os.getenv("GITHUB_ACTIONS", "").strip().lower() == "true"


def write_output(name: str, value: str) -> None:
    """
    Set a step output.

    Appends to the file named by GITHUB_OUTPUT, using a random heredoc
    delimiter for multi-line values. Without GITHUB_OUTPUT the legacy
    `::set-output` workflow command is echoed instead.
    """
    path = os.getenv("GITHUB_OUTPUT")
    if not path:
        escaped = value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        typer.echo(f"::set-output name={name}::{escaped}")
        return

    with open(path, "a", encoding="utf-8") as fh:
        if "\n" in value or "\r" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            fh.write(f"{name}={value}\n")
