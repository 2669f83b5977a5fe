"""Decide whether a group's submissions may be merged into its plan."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from memberorders.domain.model import is_eligible_order_state

from .contracts import EligibilityDecision
from .errors import (
    MissingOrderDetailError,
    MissingOrderIdError,
    OrderMismatchError,
    OrderNotFoundError,
    PlanNotFoundError,
)

if TYPE_CHECKING:
    from memberorders.domain.ports.listings import ListingService

    from .contracts import PlanGroup

log = getLogger(__name__)


async def check_eligibility(group: PlanGroup, listings: ListingService) -> EligibilityDecision:
    """Load the plan and order listings for ``group`` and validate them.

    Raises a ``GroupAbortedError`` subclass when the group cannot be processed in
    this run. An order outside the eligible states yields ``eligible=False``.
    """

    plan = await listings.get_listing(group.plan_id)
    if plan is None:
        raise PlanNotFoundError(plan_id=group.plan_id, order_id=group.order_id)

    order_id = plan.order_id
    if order_id is None:
        raise MissingOrderIdError(plan_id=group.plan_id, order_id=group.order_id)

    order_detail = plan.order_detail
    if order_detail is None:
        raise MissingOrderDetailError(plan_id=group.plan_id, order_id=order_id)

    if order_id != group.order_id:
        raise OrderMismatchError(
            plan_id=group.plan_id,
            order_id=group.order_id,
            detail=f"plan references {order_id}",
        )

    order = await listings.get_listing(order_id)
    if order is None:
        raise OrderNotFoundError(plan_id=group.plan_id, order_id=order_id)

    order_state = order.order_state
    eligible = is_eligible_order_state(order_state)
    if not eligible:
        log.warning(
            "Order %s of plan %s is in state %r; pending member orders will be canceled",
            order_id,
            group.plan_id,
            order_state,
        )
    return EligibilityDecision(
        plan=plan,
        order_id=order_id,
        order_detail=order_detail,
        order_state=order_state,
        eligible=eligible,
    )
