"""Partition pending submissions into plan/order groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from memberorders.domain.model import parse_day_entries

from .contracts import EntriesByParticipant, GroupKey, PlanGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from memberorders.domain.model import DayEntry, MemberOrderSubmission


@dataclass(slots=True)
class _GroupBuilder:
    plan_id: str
    order_id: str
    entries_by_participant: EntriesByParticipant = field(
        default_factory=dict["str", "dict[str, DayEntry]"]
    )
    submissions: list[MemberOrderSubmission] = field(
        default_factory=list["MemberOrderSubmission"]
    )

    def add(self, submission: MemberOrderSubmission) -> None:
        # later submissions replace the participant's whole plan, not single days
        self.entries_by_participant[submission.participant_id] = parse_day_entries(
            submission.plan_data,
            submission_id=submission.id,
        )
        self.submissions.append(submission)

    def build(self) -> PlanGroup:
        return PlanGroup(
            plan_id=self.plan_id,
            order_id=self.order_id,
            entries_by_participant=dict(self.entries_by_participant),
            submissions=tuple(self.submissions),
        )


def group_submissions(submissions: Iterable[MemberOrderSubmission]) -> tuple[PlanGroup, ...]:
    """Group submissions by ``(plan_id, order_id)`` keeping the latest data per participant.

    ``submissions`` must be ordered by creation time ascending.
    """

    builders: dict[GroupKey, _GroupBuilder] = {}
    for submission in submissions:
        key = (submission.plan_id, submission.order_id)
        builder = builders.get(key)
        if builder is None:
            builder = _GroupBuilder(plan_id=submission.plan_id, order_id=submission.order_id)
            builders[key] = builder
        builder.add(submission)
    return tuple(builder.build() for builder in builders.values())
