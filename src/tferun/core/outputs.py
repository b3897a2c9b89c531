"""Terraform output retrieval.

Reads the current state version of a workspace and extracts its outputs.
Only the `outputs` block of the state document is modelled, everything else
is ignored.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from tferun.core.errors import ApiError, OutputFetchError
from tferun.core.models import StateVersion, Workspace


class StateVersionsAdapter(Protocol):
    """Interface for reading state versions."""

    def read_current_state_version(self, workspace_id: str) -> StateVersion:
        """Return the current state version of a workspace."""
        ...

    def download_state(self, download_url: str) -> bytes:
        """Return the raw state document."""
        ...


class TerraformOutput(BaseModel):
    """A single output as stored in the state file."""

    type: Any = None
    value: Any = None


class MinimalTerraformState(BaseModel):
    """The part of a Terraform state document needed to read outputs."""

    outputs: dict[str, TerraformOutput] = {}


def stringify(value: Any) -> str:
    """
    Render an output value as a string.

    Strings are returned as-is, null becomes an empty string and everything
    else is JSON encoded.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def parse_outputs(raw: bytes | str) -> dict[str, str]:
    """Parse a state document and return output name -> stringified value."""
    try:
        state = MinimalTerraformState.model_validate_json(raw)
    except ValidationError as exc:
        raise OutputFetchError(f"could not parse state: {exc}") from exc
    return {name: stringify(out.value) for name, out in state.outputs.items()}


def fetch_outputs(adapter: StateVersionsAdapter, workspace: Workspace) -> dict[str, str]:
    """
    Retrieve the outputs from the current Terraform state of a workspace.

    Raises:
        OutputFetchError: The state could not be read, downloaded or parsed.
    """
    try:
        sv = adapter.read_current_state_version(workspace.id)
    except ApiError as exc:
        raise OutputFetchError(f"could not get current state: {exc}") from exc

    try:
        raw = adapter.download_state(sv.download_url)
    except ApiError as exc:
        raise OutputFetchError(f"could not download state: {exc}") from exc

    return parse_outputs(raw)
