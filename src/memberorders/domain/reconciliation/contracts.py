"""Value types passed between reconciliation stages and reported per run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from memberorders.domain.model import (
        DayEntry,
        JsonValue,
        Listing,
        MemberOrderSubmission,
        SubmissionStatus,
    )

type EntriesByDay = dict[str, DayEntry]
type EntriesByParticipant = dict[str, EntriesByDay]
type GroupKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class PlanGroup:
    """Pending submissions of one plan/order pair.

    ``entries_by_participant`` holds the latest submission's day entries per
    participant; ``submissions`` keeps every raw submission for finalization.
    """

    plan_id: str
    order_id: str
    entries_by_participant: EntriesByParticipant
    submissions: tuple[MemberOrderSubmission, ...]

    @property
    def key(self) -> GroupKey:
        return (self.plan_id, self.order_id)

    @property
    def submission_ids(self) -> tuple[str, ...]:
        return tuple(submission.id for submission in self.submissions)


@dataclass(frozen=True, slots=True)
class EligibilityDecision:
    """Outcome of validating a group against its plan and order listings."""

    plan: Listing
    order_id: str
    order_detail: Mapping[str, JsonValue]
    order_state: str | None
    eligible: bool


@dataclass(slots=True)
class FinalizeResult:
    """Per-submission results of a finalization batch."""

    status: SubmissionStatus
    updated: list[str] = field(default_factory=list[str])
    failed: dict[str, str] = field(default_factory=dict[str, str])

    @property
    def complete(self) -> bool:
        return not self.failed


class GroupStage(StrEnum):
    """Pipeline stages a group passes through, in order."""

    PENDING = "pending"
    VALIDATED = "validated"
    MERGED = "merged"
    PERSISTED = "persisted"
    FINALIZED = "finalized"


class GroupStatus(StrEnum):
    """Final classification of one group's pipeline run."""

    MERGED = "merged"
    CANCELED = "canceled"
    ABORTED = "aborted"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(slots=True, kw_only=True)
class GroupOutcome:
    plan_id: str
    order_id: str
    status: GroupStatus
    stage: GroupStage
    submission_ids: tuple[str, ...] = ()
    finalized: int = 0
    failed_writes: int = 0
    reason: str | None = None


@dataclass(slots=True)
class RunReport:
    """Summary of one reconciliation run, intended for operational logs."""

    fetched: int = 0
    outcomes: list[GroupOutcome] = field(default_factory=list[GroupOutcome])

    @property
    def groups(self) -> int:
        return len(self.outcomes)

    def count(self, status: GroupStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def merged(self) -> int:
        return self.count(GroupStatus.MERGED)

    @property
    def canceled(self) -> int:
        return self.count(GroupStatus.CANCELED)

    @property
    def aborted(self) -> int:
        return self.count(GroupStatus.ABORTED)

    @property
    def failed(self) -> int:
        return self.count(GroupStatus.FAILED)

    @property
    def finalized(self) -> int:
        return sum(outcome.finalized for outcome in self.outcomes)

    @property
    def failed_writes(self) -> int:
        return sum(outcome.failed_writes for outcome in self.outcomes)

    def outcome_for(self, plan_id: str, order_id: str) -> GroupOutcome | None:
        for outcome in self.outcomes:
            if outcome.plan_id == plan_id and outcome.order_id == order_id:
                return outcome
        return None

    def summary(self) -> str:
        return (
            f"fetched={self.fetched}, groups={self.groups}, merged={self.merged}, "
            f"canceled={self.canceled}, aborted={self.aborted}, failed={self.failed}, "
            f"finalized={self.finalized}, failed_writes={self.failed_writes}"
        )
