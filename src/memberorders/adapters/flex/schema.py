"""Pydantic models describing the Flex Integration API payloads we use."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlexBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ListingAttributes(FlexBaseModel):
    title: str | None = None
    state: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return {} if value is None else value


class ListingResource(FlexBaseModel):
    id: str
    type: str = "listing"
    attributes: ListingAttributes = Field(default_factory=ListingAttributes)

    @field_validator("id", mode="before")
    @classmethod
    def _unwrap_uuid(cls, value: object) -> object:
        # SDK-serialised ids arrive as {"_sdkType": "UUID", "uuid": "..."}
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            return mapping_value.get("uuid", value)
        return value


class ListingResponse(FlexBaseModel):
    data: ListingResource


class TokenResponse(FlexBaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(gt=0)
    scope: str | None = None


class ApiError(FlexBaseModel):
    id: str | None = None
    status: int | None = None
    code: str | None = None
    title: str | None = None


class ErrorResponse(FlexBaseModel):
    errors: list[ApiError] = Field(default_factory=list)

    def describe(self) -> str:
        parts = [error.title or error.code or "unknown error" for error in self.errors]
        return "; ".join(parts) or "unknown error"
