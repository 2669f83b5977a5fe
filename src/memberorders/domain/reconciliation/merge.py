"""Overlay participants' day entries onto a plan's order detail."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, cast

from memberorders.domain.model import MEMBER_ORDERS_KEY

if TYPE_CHECKING:
    from memberorders.domain.model import JsonObject, JsonValue

    from .contracts import EntriesByParticipant

log = getLogger(__name__)


def merge_order_detail(
    order_detail: Mapping[str, JsonValue],
    entries_by_participant: EntriesByParticipant,
) -> JsonObject:
    """Return a new order detail with the participants' entries merged in.

    The result has exactly the day keys of ``order_detail``. Entries for days the
    plan does not have are dropped. Existing member orders that the batch does not
    touch are preserved; entries for the same participant and day are replaced.
    """

    merged: JsonObject = {}
    for day, record in order_detail.items():
        if isinstance(record, Mapping):
            day_record: JsonObject = dict(cast("Mapping[str, JsonValue]", record))
        else:
            log.warning("Order detail day %s is not an object; rebuilding it", day)
            day_record = {}

        existing = day_record.get(MEMBER_ORDERS_KEY)
        member_orders: JsonObject = (
            dict(cast("Mapping[str, JsonValue]", existing))
            if isinstance(existing, Mapping)
            else {}
        )

        for entries in entries_by_participant.values():
            entry = entries.get(day)
            if entry is None:
                continue
            member_orders[entry.participant_id] = entry.items

        day_record[MEMBER_ORDERS_KEY] = member_orders
        merged[day] = day_record
    return merged
