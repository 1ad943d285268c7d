"""HTTP IPAM backend configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_var
from .http_resilience import RateLimit, ResilienceConfig

IPAM_API_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class IpamApiConfig:
    """Holds connection settings for the HTTP IPAM service."""

    base_url: str
    resilience: ResilienceConfig
    token: str | None = None


def get_ipam_api_config(*, resilience: ResilienceConfig | None = None) -> IpamApiConfig:
    base_url = require_env_var("IPAM_API_URL").rstrip("/")
    token = optional_env_var("IPAM_API_TOKEN")
    headers = {"Authorization": f"Bearer {token}"} if token else None
    return IpamApiConfig(
        base_url=base_url,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="ipam-api",
            base_url=base_url,
            timeout_seconds=IPAM_API_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=headers,
        ),
    )
