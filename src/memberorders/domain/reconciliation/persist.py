"""Write merged order detail back onto the plan listing."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from memberorders.domain.model import ORDER_DETAIL_KEY

from .errors import PlanUpdateError

if TYPE_CHECKING:
    from memberorders.domain.model import JsonObject
    from memberorders.domain.ports.listings import ListingService

log = getLogger(__name__)


async def persist_order_detail(
    listings: ListingService,
    *,
    plan_id: str,
    order_id: str,
    order_detail: JsonObject,
) -> None:
    """Replace the plan's ``orderDetail`` metadata field with ``order_detail``."""

    try:
        await listings.update_listing_metadata(plan_id, {ORDER_DETAIL_KEY: order_detail})
    except Exception as exc:
        raise PlanUpdateError(plan_id=plan_id, order_id=order_id) from exc
    log.info("Updated order detail of plan %s (order %s)", plan_id, order_id)
