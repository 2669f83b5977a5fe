"""Listing service (Flex Integration API) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_FLEX_INTEGRATION_BASE_URL = "https://flex-integ-api.sharetribe.com/v1/integration_api/"
DEFAULT_FLEX_AUTH_URL = "https://flex-api.sharetribe.com/v1/auth/token"
FLEX_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class FlexConfig:
    """Credentials and endpoints of the listing service."""

    client_id: str
    client_secret: str
    auth_url: str
    resilience: ResilienceConfig


def get_flex_config(*, resilience: ResilienceConfig | None = None) -> FlexConfig:
    values = require_env_vars(("FLEX_INTEGRATION_CLIENT_ID", "FLEX_INTEGRATION_CLIENT_SECRET"))
    base_url = optional_env_var("FLEX_INTEGRATION_BASE_URL", DEFAULT_FLEX_INTEGRATION_BASE_URL)
    return FlexConfig(
        client_id=values["FLEX_INTEGRATION_CLIENT_ID"],
        client_secret=values["FLEX_INTEGRATION_CLIENT_SECRET"],
        auth_url=optional_env_var("FLEX_AUTH_URL", DEFAULT_FLEX_AUTH_URL),
        resilience=resilience
        or ResilienceConfig(
            name="flex-integration",
            base_url=base_url,
            timeout_seconds=FLEX_TIMEOUT_SECONDS,
            # integration API allows bursts but throttles sustained traffic
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
        ),
    )
