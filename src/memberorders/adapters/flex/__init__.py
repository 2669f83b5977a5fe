"""Public interface for the Flex listing service adapter."""

from __future__ import annotations

from .client import FlexListingService, ListingAuthError, ListingServiceError
from .schema import ListingResource, ListingResponse, TokenResponse
from .translator import parse_listing, parse_listing_response

__all__ = [
    "FlexListingService",
    "ListingAuthError",
    "ListingResource",
    "ListingResponse",
    "ListingServiceError",
    "TokenResponse",
    "parse_listing",
    "parse_listing_response",
]
