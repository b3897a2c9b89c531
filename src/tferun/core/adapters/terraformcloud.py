from __future__ import annotations

import io
import os
import tarfile
from typing import Any

import requests

from tferun.core.errors import ApiError, NotFoundError
from tferun.core.models import (
    ConfigurationStatus,
    ConfigurationVersion,
    Run,
    RunStatus,
    StateVersion,
    Workspace,
)

# Directories never uploaded, matching the default .terraformignore rules.
_IGNORED_DIRS = frozenset({".git", ".terraform"})

# (connect, read) seconds for every API call.
DEFAULT_TIMEOUT = (10.0, 120.0)


def _attrs(doc: dict[str, Any]) -> tuple[str, dict[str, Any], dict[str, Any]]:
    """Return (id, attributes, relationships) of a JSON:API `data` object."""
    data = doc.get("data") or {}
    return (
        str(data.get("id") or ""),
        data.get("attributes") or {},
        data.get("relationships") or {},
    )


def _error_message(resp: requests.Response) -> str:
    """Build a readable message from a JSON:API error response."""
    try:
        errors = resp.json().get("errors") or []
    except ValueError:
        errors = []
    parts = []
    for err in errors:
        if not isinstance(err, dict):
            parts.append(str(err))
            continue
        title = err.get("title") or ""
        detail = err.get("detail") or ""
        parts.append(f"{title}: {detail}" if title and detail else title or detail)
    if parts:
        return "; ".join(p for p in parts if p)
    return f"{resp.status_code} {resp.reason or ''}".strip()


def pack_directory(directory: str) -> bytes:
    """
    Return `directory` as a gzipped tarball, paths relative to `directory`.

    Symlinked directories are stored as symlinks, not followed.

    Raises:
        NotADirectoryError: `directory` does not exist or is not a directory.
    """
    if not os.path.isdir(directory):
        raise NotADirectoryError(f"'{directory}' is not a directory")

    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for root, dirs, files in os.walk(directory):
            dirs[:] = sorted(d for d in dirs if d not in _IGNORED_DIRS)
            for name in dirs:
                path = os.path.join(root, name)
                if os.path.islink(path):
                    tar.add(path, arcname=os.path.relpath(path, directory), recursive=False)
            for name in sorted(files):
                path = os.path.join(root, name)
                tar.add(path, arcname=os.path.relpath(path, directory), recursive=False)
    return buf.getvalue()


class TerraformCloudAdapter:
    """Adapter around the Terraform Cloud / Enterprise v2 API."""

    def __init__(
        self,
        session: requests.Session,
        hostname: str = "app.terraform.io",
        timeout: float | tuple[float, float] = DEFAULT_TIMEOUT,
    ):
        """Create an adapter for the API at `hostname`."""
        self.session = session
        self.hostname = hostname
        self.timeout = timeout
        self.base_url = f"https://{hostname}/api/v2"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request, raising ApiError (or NotFoundError) on failure."""
        if not url.startswith("http"):
            url = f"{self.base_url}{url}"
        kwargs.setdefault("timeout", self.timeout)
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code == 404:
            raise NotFoundError(_error_message(resp), status_code=404)
        if resp.status_code >= 400:
            raise ApiError(_error_message(resp), status_code=resp.status_code)
        return resp

    def _json(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        resp = self._request(method, url, **kwargs)
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(f"invalid JSON response from {url}: {exc}") from exc

    def read_workspace(self, organization: str, name: str) -> Workspace:
        """Return a workspace by organization and name."""
        doc = self._json("GET", f"/organizations/{organization}/workspaces/{name}")
        ws_id, attrs, rels = _attrs(doc)
        org = ((rels.get("organization") or {}).get("data") or {}).get("id")
        return Workspace(
            id=ws_id,
            name=attrs.get("name") or name,
            organization=org or organization,
            working_directory=attrs.get("working-directory") or "",
            auto_apply=bool(attrs.get("auto-apply")),
        )

    def create_configuration_version(
        self, workspace_id: str, *, auto_queue_runs: bool, speculative: bool
    ) -> ConfigurationVersion:
        """Create a configuration version in a workspace."""
        body = {
            "data": {
                "type": "configuration-versions",
                "attributes": {
                    "auto-queue-runs": auto_queue_runs,
                    "speculative": speculative,
                },
            }
        }
        doc = self._json("POST", f"/workspaces/{workspace_id}/configuration-versions", json=body)
        return self._configuration_version(doc)

    def read_configuration_version(self, configuration_version_id: str) -> ConfigurationVersion:
        """Return the current state of a configuration version."""
        doc = self._json("GET", f"/configuration-versions/{configuration_version_id}")
        return self._configuration_version(doc)

    @staticmethod
    def _configuration_version(doc: dict[str, Any]) -> ConfigurationVersion:
        cv_id, attrs, _ = _attrs(doc)
        return ConfigurationVersion(
            id=cv_id,
            status=ConfigurationStatus.parse(attrs.get("status")),
            upload_url=attrs.get("upload-url"),
            speculative=bool(attrs.get("speculative")),
            auto_queue_runs=bool(attrs.get("auto-queue-runs")),
            error=attrs.get("error"),
            error_message=attrs.get("error-message"),
        )

    def upload_configuration(self, upload_url: str, directory: str) -> None:
        """Upload `directory` as tarball. The upload URL is pre-signed."""
        payload = pack_directory(directory)
        self._request(
            "PUT",
            upload_url,
            data=payload,
            headers={"Content-Type": "application/octet-stream", "Authorization": None},
        )

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
        """Create a run. Unset optional attributes are left out of the request."""
        attributes: dict[str, Any] = {"is-destroy": is_destroy}
        if message:
            attributes["message"] = message
        if target_addrs:
            attributes["target-addrs"] = list(target_addrs)
        if replace_addrs:
            attributes["replace-addrs"] = list(replace_addrs)

        body = {
            "data": {
                "type": "runs",
                "attributes": attributes,
                "relationships": {
                    "workspace": {"data": {"type": "workspaces", "id": workspace_id}},
                    "configuration-version": {
                        "data": {
                            "type": "configuration-versions",
                            "id": configuration_version_id,
                        }
                    },
                },
            }
        }
        return self._run(self._json("POST", "/runs", json=body))

    def read_run(self, run_id: str) -> Run:
        """Return the current state of a run."""
        return self._run(self._json("GET", f"/runs/{run_id}"))

    @staticmethod
    def _run(doc: dict[str, Any]) -> Run:
        run_id, attrs, _ = _attrs(doc)
        raw_status = str(attrs.get("status") or "")
        return Run(
            id=run_id,
            status=RunStatus.parse(raw_status),
            raw_status=raw_status,
            has_changes=bool(attrs.get("has-changes")),
            is_destroy=bool(attrs.get("is-destroy")),
            message=attrs.get("message"),
        )

    def read_current_state_version(self, workspace_id: str) -> StateVersion:
        """Return the current state version of a workspace."""
        doc = self._json("GET", f"/workspaces/{workspace_id}/current-state-version")
        sv_id, attrs, _ = _attrs(doc)
        url = attrs.get("hosted-state-download-url")
        if not url:
            raise ApiError(f"state version {sv_id} has no download URL")
        return StateVersion(id=sv_id, download_url=url)

    def download_state(self, download_url: str) -> bytes:
        """Download a raw state document."""
        resp = self._request("GET", download_url, headers={"Accept": "application/json"})
        return resp.content
