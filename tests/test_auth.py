import pytest

from tferun.core.auth import get_session, resolve_workspace, sanitize_hostname
from tferun.core.errors import AuthError, NotFoundError
from tferun.core.models import Workspace


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "app.terraform.io"),
        ("", "app.terraform.io"),
        ("tfe.example.com", "tfe.example.com"),
        ("https://tfe.example.com/", "tfe.example.com"),
        (" https://tfe.example.com/app/acme ", "tfe.example.com"),
    ],
)
def test_sanitize_hostname(value, expected):
    assert sanitize_hostname(value) == expected


def test_get_session_sets_bearer_token():
    session = get_session(" abc ")

    assert session.headers["Authorization"] == "Bearer abc"
    assert session.headers["Content-Type"] == "application/vnd.api+json"


@pytest.mark.parametrize("token", [None, "", "   "])
def test_get_session_requires_token(token):
    with pytest.raises(AuthError, match="no API token"):
        get_session(token)


def test_resolve_workspace_wraps_api_errors():
    class _Adapter:
        def read_workspace(self, organization, name):
            raise NotFoundError("not found", status_code=404)

    with pytest.raises(AuthError, match="acme/app"):
        resolve_workspace(_Adapter(), "acme", "app")


def test_resolve_workspace_returns_workspace():
    ws = Workspace(id="ws-1", name="app", organization="acme")

    class _Adapter:
        def read_workspace(self, organization, name):
            return ws

    assert resolve_workspace(_Adapter(), "acme", "app") is ws
