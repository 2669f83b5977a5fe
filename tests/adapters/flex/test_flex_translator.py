from __future__ import annotations

import pytest
from pydantic import ValidationError

from memberorders.adapters.flex import parse_listing, parse_listing_response
from memberorders.adapters.flex.schema import ErrorResponse


def test_parse_listing_unwraps_sdk_uuid_and_null_metadata() -> None:
    listing = parse_listing(
        {
            "id": {"_sdkType": "UUID", "uuid": "order-1"},
            "type": "listing",
            "attributes": {"metadata": None, "publicData": {"ignored": True}},
        }
    )

    assert listing.id == "order-1"
    assert listing.metadata == {}
    assert listing.order_state is None


def test_parse_listing_response_keeps_metadata() -> None:
    listing = parse_listing_response(
        {
            "data": {
                "id": "order-1",
                "attributes": {"metadata": {"orderState": "picking", "plans": ["plan-1"]}},
            }
        }
    )

    assert listing.order_state == "picking"
    assert listing.metadata["plans"] == ["plan-1"]


def test_parse_listing_response_requires_data() -> None:
    with pytest.raises(ValidationError):
        parse_listing_response({"included": []})


def test_error_response_describes_each_error() -> None:
    response = ErrorResponse.model_validate(
        {"errors": [{"title": "Bad request"}, {"code": "listing-not-found"}, {}]}
    )

    assert response.describe() == "Bad request; listing-not-found; unknown error"
    assert ErrorResponse().describe() == "unknown error"
