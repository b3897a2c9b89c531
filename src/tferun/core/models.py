"""Core domain models for Terraform Cloud runs.

This module defines the data structures used throughout the application to
represent workspaces, configuration versions and runs. These models are
intentionally simple, immutable, and free of any HTTP or presentation
concerns; the adapter layer converts API documents into them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunType(str, Enum):
    """
    The kind of run to schedule.

    Values:
        PLAN: Speculative plan, can never be applied.
        APPLY: Regular plan followed by an apply.
        DESTROY: Plan and apply that destroys all managed resources.
    """

    PLAN = "plan"
    APPLY = "apply"
    DESTROY = "destroy"

    @classmethod
    def parse(cls, value: str) -> RunType:
        """Return the RunType for `value` or raise ValueError."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f'Type "{value}" is not supported, must be plan, apply or destroy'
            ) from None


class ConfigurationStatus(str, Enum):
    """
    Status of a configuration version.

    UPLOADED means the content has been received and processed, the version
    can be referenced by a run. ERRORED is terminal.
    """

    PENDING = "pending"
    FETCHING = "fetching"
    UPLOADED = "uploaded"
    ERRORED = "errored"
    ARCHIVED = "archived"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ConfigurationStatus:
        try:
            return cls(value or "")
        except ValueError:
            return cls.UNKNOWN


class RunStatus(str, Enum):
    """
    Closed set of run statuses reported by Terraform Cloud.

    Anything the API returns that is not listed here maps to UNKNOWN, the
    raw token is kept on the Run.
    """

    PENDING = "pending"
    FETCHING = "fetching"
    FETCHING_COMPLETED = "fetching_completed"
    PRE_PLAN_RUNNING = "pre_plan_running"
    PRE_PLAN_COMPLETED = "pre_plan_completed"
    QUEUING = "queuing"
    PLAN_QUEUED = "plan_queued"
    PLANNING = "planning"
    PLANNED = "planned"
    COST_ESTIMATING = "cost_estimating"
    COST_ESTIMATED = "cost_estimated"
    POLICY_CHECKING = "policy_checking"
    POLICY_OVERRIDE = "policy_override"
    POLICY_CHECKED = "policy_checked"
    POST_PLAN_RUNNING = "post_plan_running"
    POST_PLAN_COMPLETED = "post_plan_completed"
    CONFIRMED = "confirmed"
    QUEUING_APPLY = "queuing_apply"
    APPLY_QUEUED = "apply_queued"
    PRE_APPLY_RUNNING = "pre_apply_running"
    PRE_APPLY_COMPLETED = "pre_apply_completed"
    APPLYING = "applying"
    POST_APPLY_RUNNING = "post_apply_running"
    POST_APPLY_COMPLETED = "post_apply_completed"

    PLANNED_AND_FINISHED = "planned_and_finished"
    APPLIED = "applied"
    POLICY_SOFT_FAILED = "policy_soft_failed"
    DISCARDED = "discarded"
    ERRORED = "errored"
    CANCELED = "canceled"
    FORCE_CANCELED = "force_canceled"

    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> RunStatus:
        try:
            return cls(value or "")
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        """True if no further transition will happen for this status."""
        return self in _TERMINAL_RUN_STATUSES


_TERMINAL_RUN_STATUSES = frozenset(
    {
        RunStatus.PLANNED_AND_FINISHED,
        RunStatus.APPLIED,
        RunStatus.POLICY_SOFT_FAILED,
        RunStatus.DISCARDED,
        RunStatus.ERRORED,
        RunStatus.CANCELED,
        RunStatus.FORCE_CANCELED,
    }
)


def pretty_status(raw: str) -> str:
    """Render a status token for humans (`planned_and_finished` -> `planned and finished`)."""
    return raw.replace("_", " ")


@dataclass(frozen=True)
class Workspace:
    """
    Represents a Terraform Cloud workspace.

    Attributes:
        id: Unique identifier (ws-...).
        name: Workspace name.
        organization: Name of the owning organization.
        working_directory: Relative path Terraform runs in, may be empty.
        auto_apply: Whether successful plans are applied without confirmation.
    """

    id: str
    name: str
    organization: str
    working_directory: str = ""
    auto_apply: bool = False


@dataclass(frozen=True)
class ConfigurationVersion:
    """An uploaded (or to be uploaded) snapshot of Terraform configuration."""

    id: str
    status: ConfigurationStatus
    upload_url: str | None = None
    speculative: bool = False
    auto_queue_runs: bool = False
    error: str | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class Run:
    """
    A single run, as last fetched from the API.

    Attributes:
        id: Unique identifier of the run (run-...).
        status: Parsed status.
        raw_status: Status token exactly as returned by the API.
        has_changes: Whether the plan contains changes.
        is_destroy: Whether this is a destroy run.
        message: Optional human message.
    """

    id: str
    status: RunStatus
    raw_status: str
    has_changes: bool = False
    is_destroy: bool = False
    message: str | None = None


@dataclass(frozen=True)
class StateVersion:
    """Reference to a persisted state snapshot."""

    id: str
    download_url: str


@dataclass(frozen=True)
class RunOptions:
    """
    All options available when creating a new run.

    Attributes:
        type: The type of run to schedule.
        message: Message used as name of the run.
        directory: Directory uploaded to Terraform Cloud, defaults to `./`.
        target_addrs: Resource addresses passed to `-target`, None for no targeting.
        replace_addrs: Resource addresses passed to `-replace`, None for none.
        wait_for_completion: Block until the run is finished when it is safe to.
        tf_vars: Contents of a temporary `run.auto.tfvars` file.
    """

    type: RunType = RunType.APPLY
    message: str | None = None
    directory: str | None = None
    target_addrs: tuple[str, ...] | None = None
    replace_addrs: tuple[str, ...] | None = None
    wait_for_completion: bool = True
    tf_vars: str | None = None


@dataclass(frozen=True)
class RunOutput:
    """
    Data generated by a run.

    `has_changes` and `status` are only populated when completion of the run
    was observed.
    """

    run_url: str
    has_changes: bool | None = None
    status: RunStatus | None = None
    raw_status: str | None = None


def not_empty_or_none(value: str | None) -> str | None:
    """Return None for None or an empty string, the value otherwise."""
    if not value:
        return None
    return value


def split_addresses(value: str | None) -> tuple[str, ...] | None:
    """
    Split a newline separated list of resource addresses.

    Blank lines are dropped. A list without any address is None, never an
    empty tuple: "no targets" must not be sent as "target nothing".
    """
    if not value:
        return None
    addrs = tuple(line.strip() for line in value.splitlines() if line.strip())
    return addrs or None
