"""Translate Flex listing payloads into domain listings."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from memberorders.domain.model import Listing

from .schema import ListingResource, ListingResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from memberorders.domain.model import JsonValue


def parse_listing(payload: Mapping[str, object] | ListingResource) -> Listing:
    resource = (
        payload if isinstance(payload, ListingResource) else ListingResource.model_validate(payload)
    )
    metadata = cast("dict[str, JsonValue]", dict(resource.attributes.metadata))
    return Listing(id=resource.id, metadata=metadata)


def parse_listing_response(payload: object) -> Listing:
    response = ListingResponse.model_validate(payload)
    return parse_listing(response.data)
