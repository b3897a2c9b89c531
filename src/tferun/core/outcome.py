"""Classification of terminal run statuses.

Pure logic, no API access. Kept separate from the run driver so the mapping
from status to outcome can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tferun.core.models import RunStatus, pretty_status


class Outcome(str, Enum):
    """
    Result category of a finished run.

    Values:
        PLANNED: The plan finished, nothing was (or will be) applied.
        APPLIED: The run has been applied.
        SOFT_FAILED: A soft-mandatory policy failed. The run stopped but
            this is neither success nor failure.
        FAILED: The run errored, was discarded or canceled, or ended with
            a status that isn't known to be successful.
    """

    PLANNED = "planned"
    APPLIED = "applied"
    SOFT_FAILED = "soft_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class RunResult:
    """Outcome of a run plus a human readable reason."""

    outcome: Outcome
    reason: str

    @property
    def failed(self) -> bool:
        return self.outcome == Outcome.FAILED


_OUTCOMES = {
    RunStatus.PLANNED_AND_FINISHED: Outcome.PLANNED,
    RunStatus.APPLIED: Outcome.APPLIED,
    RunStatus.POLICY_SOFT_FAILED: Outcome.SOFT_FAILED,
}


def interpret(status: RunStatus, raw_status: str | None = None) -> RunResult:
    """
    Map a terminal run status to an outcome.

    Unknown statuses are always failures, never silent successes.
    """
    raw = raw_status or status.value
    outcome = _OUTCOMES.get(status, Outcome.FAILED)
    if outcome == Outcome.PLANNED:
        reason = "Run is planned and finished."
    elif outcome == Outcome.APPLIED:
        reason = "Run has been applied!"
    elif outcome == Outcome.SOFT_FAILED:
        reason = "Run stopped on a soft-mandatory policy failure."
    else:
        reason = pretty_status(raw)
    return RunResult(outcome=outcome, reason=reason)
