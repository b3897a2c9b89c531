import pytest

from tferun.core.models import (
    ConfigurationStatus,
    RunStatus,
    RunType,
    not_empty_or_none,
    pretty_status,
    split_addresses,
)


@pytest.mark.parametrize("value", ["", None])
def test_split_addresses_empty_is_none(value):
    assert split_addresses(value) is None


def test_split_addresses_only_blank_lines_is_none():
    assert split_addresses("\n  \n") is None


def test_split_addresses_drops_blank_lines():
    assert split_addresses("aws_instance.a\n\n module.b \n") == (
        "aws_instance.a",
        "module.b",
    )


def test_not_empty_or_none():
    assert not_empty_or_none("") is None
    assert not_empty_or_none(None) is None
    assert not_empty_or_none("msg") == "msg"


def test_run_type_parse():
    assert RunType.parse("plan") == RunType.PLAN
    assert RunType.parse("destroy") == RunType.DESTROY
    with pytest.raises(ValueError, match="must be plan, apply or destroy"):
        RunType.parse("refresh")


@pytest.mark.parametrize("value", ["Destroy", " apply ", "PLAN", ""])
def test_run_type_parse_is_exact(value):
    with pytest.raises(ValueError, match="is not supported"):
        RunType.parse(value)


def test_run_status_parse_unknown_token():
    assert RunStatus.parse("applied") == RunStatus.APPLIED
    assert RunStatus.parse("something_new") == RunStatus.UNKNOWN
    assert RunStatus.parse(None) == RunStatus.UNKNOWN


def test_run_status_terminal_set():
    assert RunStatus.POLICY_SOFT_FAILED.is_terminal
    assert RunStatus.DISCARDED.is_terminal
    assert not RunStatus.PLANNED.is_terminal
    assert not RunStatus.APPLYING.is_terminal
    assert not RunStatus.UNKNOWN.is_terminal


def test_configuration_status_parse():
    assert ConfigurationStatus.parse("uploaded") == ConfigurationStatus.UPLOADED
    assert ConfigurationStatus.parse("weird") == ConfigurationStatus.UNKNOWN


def test_pretty_status():
    assert pretty_status("planned_and_finished") == "planned and finished"
