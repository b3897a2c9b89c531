"""Authentication helpers for Terraform Cloud.

This module centralizes creation of an authenticated HTTP session and applies
small but important normalization rules (such as sanitizing the hostname)
so the rest of the code can build API and browser URLs safely.
"""

from __future__ import annotations

from typing import Protocol

import requests

from tferun.core.errors import ApiError, AuthError
from tferun.core.models import Workspace

_USER_AGENT = "tfe-run"


class WorkspacesAdapter(Protocol):
    """Interface for workspace lookups."""

    def read_workspace(self, organization: str, name: str) -> Workspace:
        """Return the workspace `organization/name`."""
        ...


def sanitize_hostname(hostname: str | None) -> str:
    """
    Normalize a Terraform Cloud/Enterprise hostname.

    - Removes a scheme (`https://`)
    - Removes any path and trailing slashes

    Defaults to app.terraform.io when empty.
    """
    if not hostname or not hostname.strip():
        return "app.terraform.io"
    host = hostname.strip()
    if "://" in host:
        host = host.split("://", 1)[1]
    return host.split("/", 1)[0]


def get_session(token: str | None) -> requests.Session:
    """
    Create a requests Session that authenticates with a Terraform Cloud API token.

    Raises:
        AuthError: The token is missing.
    """
    if not token or not token.strip():
        raise AuthError("Terraform Cloud authentication failed: no API token given.")
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {token.strip()}",
            "Content-Type": "application/vnd.api+json",
            "User-Agent": _USER_AGENT,
        }
    )
    return session


def format_workspace_error(organization: str, workspace: str, message: str) -> str:
    """Return a user-friendly message for a workspace that can't be read."""
    return (
        f"could not retrieve workspace '{organization}/{workspace}': {message}\n"
        "Check the organization and workspace name, and that the token has access."
    )


def resolve_workspace(adapter: WorkspacesAdapter, organization: str, name: str) -> Workspace:
    """Read the workspace once, wrapping any failure in AuthError."""
    try:
        return adapter.read_workspace(organization, name)
    except ApiError as exc:
        raise AuthError(format_workspace_error(organization, name, str(exc))) from exc
