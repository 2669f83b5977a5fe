"""Member-order submissions and their per-day payloads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, cast

from .enums import SubmissionStatus

if TYPE_CHECKING:
    from .types import JsonValue

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False)
class MemberOrderSubmission:
    """One participant's proposed order content for a plan.

    ``plan_data`` maps a day key to a one-entry mapping keyed by the participant id,
    e.g. ``{"2024-01-01": {"user-1": {"foodId": "soup"}}}``. Use
    :func:`parse_day_entries` to read it.
    """

    id: str
    plan_id: str
    participant_id: str
    order_id: str
    plan_data: dict[str, JsonValue] = field(default_factory=dict["str", "JsonValue"])
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class DayEntry:
    """A participant's items for one day of a plan."""

    participant_id: str
    items: JsonValue


def parse_day_entries(
    plan_data: Mapping[str, JsonValue],
    *,
    submission_id: str | None = None,
) -> dict[str, DayEntry]:
    """Convert raw ``plan_data`` into tagged :class:`DayEntry` values.

    Days whose payload is not a mapping, or whose mapping does not hold exactly one
    participant key, are skipped.
    """

    entries: dict[str, DayEntry] = {}
    for day, payload in plan_data.items():
        if not isinstance(payload, Mapping):
            log.warning(
                "Skipping day %s of submission %s: payload is not an object",
                day,
                submission_id,
            )
            continue
        wrapped = cast("Mapping[str, JsonValue]", payload)
        if len(wrapped) != 1:
            log.warning(
                "Skipping day %s of submission %s: expected one participant key, got %d",
                day,
                submission_id,
                len(wrapped),
            )
            continue
        ((participant_id, items),) = wrapped.items()
        entries[day] = DayEntry(participant_id=str(participant_id), items=items)
    return entries
