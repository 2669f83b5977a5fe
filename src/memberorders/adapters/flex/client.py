"""Async listing service backed by the Flex Integration API."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Unpack

import httpx
from pydantic import ValidationError

from memberorders.adapters.http_resilience import ResilientClient

from .schema import ErrorResponse, TokenResponse
from .translator import parse_listing_response

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from memberorders.adapters.http_resilience import RequestOptions
    from memberorders.config.flex import FlexConfig
    from memberorders.config.http_resilience import ResilienceConfig
    from memberorders.domain.model import JsonValue, Listing
    from memberorders.domain.ports.listings import ListingService

log = getLogger(__name__)

TOKEN_SCOPE = "integ"
# refresh a little before the server-side expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 30.0


class ListingServiceError(RuntimeError):
    """Raised when the listing service returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ListingAuthError(ListingServiceError):
    """Raised when no access token can be obtained."""


@dataclass(slots=True)
class _AccessToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at - TOKEN_EXPIRY_MARGIN_SECONDS


class FlexListingService:
    """Read and update listings through the Integration API.

    Use as an async context manager so one HTTP client (and one token) serves a
    whole reconciliation run.
    """

    def __init__(
        self,
        *,
        config: FlexConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._monotonic = monotonic
        self._client: ResilientClient | None = None
        self._token: _AccessToken | None = None
        self._token_lock = asyncio.Lock()

    async def __aenter__(self) -> FlexListingService:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._token = None

    async def get_listing(self, listing_id: str) -> Listing | None:
        response = await self._authorized_request(
            "GET", "listings/show", params={"id": listing_id}
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("Listing %s not found", listing_id)
            return None
        _raise_for_error(response, action=f"fetch listing {listing_id}")
        try:
            return parse_listing_response(response.json())
        except (ValueError, ValidationError) as exc:
            raise ListingServiceError(
                f"Unexpected payload for listing {listing_id}",
                status_code=response.status_code,
            ) from exc

    async def update_listing_metadata(
        self,
        listing_id: str,
        metadata: Mapping[str, JsonValue],
    ) -> None:
        response = await self._authorized_request(
            "POST",
            "listings/update",
            params={"expand": "false"},
            json={"id": listing_id, "metadata": dict(metadata)},
        )
        _raise_for_error(response, action=f"update listing {listing_id}")

    async def _authorized_request(
        self,
        method: str,
        path: str,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        client = self._require_client()
        token = await self._access_token()
        response = await client.request(
            method, path, headers={"Authorization": f"Bearer {token}"}, **kwargs
        )
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response

        log.info("Access token rejected; requesting a new one")
        self._token = None
        token = await self._access_token()
        return await client.request(
            method, path, headers={"Authorization": f"Bearer {token}"}, **kwargs
        )

    async def _access_token(self) -> str:
        async with self._token_lock:
            now = self._monotonic()
            if self._token is not None and self._token.is_valid(now):
                return self._token.value
            self._token = await self._request_token(now)
            return self._token.value

    async def _request_token(self, now: float) -> _AccessToken:
        client = self._require_client()
        response = await client.post(
            self._config.auth_url,
            data={
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret,
                "grant_type": "client_credentials",
                "scope": TOKEN_SCOPE,
            },
        )
        if response.is_error:
            raise ListingAuthError(
                f"Token request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ListingAuthError("Unexpected token response payload") from exc
        return _AccessToken(value=payload.access_token, expires_at=now + payload.expires_in)

    def _require_client(self) -> ResilientClient:
        if self._client is None:
            raise ListingServiceError(
                "FlexListingService used outside its context; use 'async with'"
            )
        return self._client


def _raise_for_error(response: httpx.Response, *, action: str) -> None:
    if not response.is_error:
        return
    try:
        detail = ErrorResponse.model_validate(response.json()).describe()
    except (ValueError, ValidationError):
        detail = response.text or response.reason_phrase
    log.error("Listing service failed to %s: %s %s", action, response.status_code, detail)
    raise ListingServiceError(
        f"Failed to {action}: {response.status_code} {detail}",
        status_code=response.status_code,
    )


if TYPE_CHECKING:

    def _service_check(config: FlexConfig) -> ListingService:
        return FlexListingService(config=config)
