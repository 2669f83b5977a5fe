"""Listings exposed by the listing service (plans and orders)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .types import JsonValue

ORDER_ID_KEY: Final[str] = "orderId"
ORDER_DETAIL_KEY: Final[str] = "orderDetail"
ORDER_STATE_KEY: Final[str] = "orderState"
MEMBER_ORDERS_KEY: Final[str] = "memberOrders"


@dataclass(frozen=True, slots=True)
class Listing:
    """A listing and its private metadata."""

    id: str
    metadata: Mapping[str, JsonValue] = field(default_factory=dict["str", "JsonValue"])

    @property
    def order_id(self) -> str | None:
        value = self.metadata.get(ORDER_ID_KEY)
        if isinstance(value, str) and value.strip():
            return value
        return None

    @property
    def order_detail(self) -> Mapping[str, JsonValue] | None:
        value = self.metadata.get(ORDER_DETAIL_KEY)
        if isinstance(value, Mapping):
            return value
        return None

    @property
    def order_state(self) -> str | None:
        value = self.metadata.get(ORDER_STATE_KEY)
        return value if isinstance(value, str) else None
