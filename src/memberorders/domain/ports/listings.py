"""Port for the external listing service holding plans and orders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from memberorders.domain.model import JsonValue, Listing


@runtime_checkable
class ListingService(Protocol):
    """Async access to listings and their metadata."""

    async def get_listing(self, listing_id: str) -> Listing | None:
        """Return the listing, or ``None`` when it does not exist."""
        ...

    async def update_listing_metadata(
        self,
        listing_id: str,
        metadata: Mapping[str, JsonValue],
    ) -> None:
        """Replace the given top-level metadata keys on the listing."""
        ...
