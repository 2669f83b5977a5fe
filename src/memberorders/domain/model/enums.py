"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    CANCELED = "canceled"
    CANCELED_BY_BOOKER = "canceledByBooker"
    PICKING = "picking"
    IN_PROGRESS = "inProgress"
    PENDING_PAYMENT = "pendingPayment"
    COMPLETED = "completed"
    REVIEWED = "reviewed"
    EXPIRED_START = "expiredStart"


class OrderState(StrEnum):
    """Lifecycle state stored on the parent order listing."""

    CANCELED = "canceled"
    CANCELED_BY_BOOKER = "canceledByBooker"
    PICKING = "picking"
    IN_PROGRESS = "inProgress"
    PENDING_PAYMENT = "pendingPayment"
    COMPLETED = "completed"
    REVIEWED = "reviewed"
    EXPIRED_START = "expiredStart"


ELIGIBLE_ORDER_STATES: frozenset[OrderState] = frozenset(
    {OrderState.PICKING, OrderState.IN_PROGRESS}
)


def is_eligible_order_state(value: object) -> bool:
    """Return whether ``value`` names an order state that still accepts member orders."""

    return isinstance(value, str) and value in ELIGIBLE_ORDER_STATES
