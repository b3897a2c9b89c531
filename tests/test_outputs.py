import pytest

from tferun.core.errors import ApiError, OutputFetchError
from tferun.core.models import StateVersion, Workspace
from tferun.core.outputs import fetch_outputs, parse_outputs, stringify


class _StateAdapterStub:
    def __init__(self, payload=b"{}", read_error=None, download_error=None):
        self.payload = payload
        self.read_error = read_error
        self.download_error = download_error
        self.downloaded: list[str] = []

    def read_current_state_version(self, workspace_id):
        if self.read_error:
            raise self.read_error
        return StateVersion(id="sv-1", download_url=f"https://archivist/{workspace_id}")

    def download_state(self, download_url):
        if self.download_error:
            raise self.download_error
        self.downloaded.append(download_url)
        return self.payload


_WS = Workspace(id="ws-1", name="app", organization="acme")


def test_fetch_outputs_extracts_string_values():
    adapter = _StateAdapterStub(
        b'{"outputs":{"endpoint":{"type":"string","value":"https://x"}}}'
    )

    assert fetch_outputs(adapter, _WS) == {"endpoint": "https://x"}
    assert adapter.downloaded == ["https://archivist/ws-1"]


def test_parse_outputs_ignores_other_fields_and_stringifies():
    raw = """
    {
      "version": 4,
      "serial": 12,
      "resources": [],
      "outputs": {
        "count": {"type": "number", "value": 3},
        "enabled": {"type": "bool", "value": true},
        "zones": {"type": ["list", "string"], "value": ["a", "b"]},
        "nothing": {"type": "string", "value": null}
      }
    }
    """

    assert parse_outputs(raw) == {
        "count": "3",
        "enabled": "true",
        "zones": '["a","b"]',
        "nothing": "",
    }


def test_parse_outputs_without_outputs_block():
    assert parse_outputs(b'{"version": 4}') == {}


def test_parse_outputs_rejects_invalid_json():
    with pytest.raises(OutputFetchError, match="could not parse state"):
        parse_outputs(b"not json")


def test_stringify_nested_objects():
    assert stringify({"k": "v"}) == '{"k":"v"}'
    assert stringify("plain") == "plain"


def test_read_errors_are_wrapped():
    cause = ApiError("not found", status_code=404)

    with pytest.raises(OutputFetchError, match="could not get current state") as excinfo:
        fetch_outputs(_StateAdapterStub(read_error=cause), _WS)

    assert excinfo.value.__cause__ is cause


def test_download_errors_are_wrapped():
    with pytest.raises(OutputFetchError, match="could not download state"):
        fetch_outputs(_StateAdapterStub(download_error=ApiError("boom")), _WS)
