"""Domain model for member-order reconciliation."""

from __future__ import annotations

from .enums import ELIGIBLE_ORDER_STATES, OrderState, SubmissionStatus, is_eligible_order_state
from .listing import (
    MEMBER_ORDERS_KEY,
    ORDER_DETAIL_KEY,
    ORDER_ID_KEY,
    ORDER_STATE_KEY,
    Listing,
)
from .submission import DayEntry, MemberOrderSubmission, parse_day_entries
from .types import JsonObject, JsonScalar, JsonValue

__all__ = [
    "ELIGIBLE_ORDER_STATES",
    "MEMBER_ORDERS_KEY",
    "ORDER_DETAIL_KEY",
    "ORDER_ID_KEY",
    "ORDER_STATE_KEY",
    "DayEntry",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Listing",
    "MemberOrderSubmission",
    "OrderState",
    "SubmissionStatus",
    "is_eligible_order_state",
    "parse_day_entries",
]
