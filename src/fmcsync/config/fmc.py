"""Firepower Management Center connection settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

FMC_TIMEOUT_SECONDS = 30.0
# FMC accepts 120 REST calls per minute per user.
FMC_RATE_LIMIT = RateLimit(max_calls=2, per_seconds=1.0)
FMC_TOKEN_HEADER = "X-auth-access-token"


@dataclass(frozen=True, slots=True)
class FmcConfig:
    """Holds FMC API configuration values."""

    host: str
    domain_uuid: str
    access_token: str
    resilience: ResilienceConfig
    lookup_resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or _base_url(self.host)


def _base_url(host: str) -> str:
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"https://{host}"
    return host


def build_fmc_resilience(
    *,
    host: str,
    access_token: str,
    verify_tls: bool = True,
    cached: bool = False,
) -> ResilienceConfig:
    """Return client settings for the FMC API.

    Reads of managed objects must observe live state, so only the lookup client
    caches. POST is never retried because creating a policy is not idempotent.
    """

    return ResilienceConfig(
        name="fmc-lookup" if cached else "fmc",
        base_url=_base_url(host),
        timeout_seconds=FMC_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=FMC_RATE_LIMIT,
        cache=CacheConfig() if cached else None,
        default_headers={
            FMC_TOKEN_HEADER: access_token,
            "Accept": "application/json",
        },
        verify_tls=verify_tls,
    )


def get_fmc_config() -> FmcConfig:
    values = require_env_vars(("FMC_HOST", "FMC_DOMAIN_UUID", "FMC_ACCESS_TOKEN"))
    verify_tls = not env_flag("FMC_INSECURE")
    host = values["FMC_HOST"]
    token = values["FMC_ACCESS_TOKEN"]
    return FmcConfig(
        host=host,
        domain_uuid=values["FMC_DOMAIN_UUID"],
        access_token=token,
        resilience=build_fmc_resilience(host=host, access_token=token, verify_tls=verify_tls),
        lookup_resilience=build_fmc_resilience(
            host=host, access_token=token, verify_tls=verify_tls, cached=True
        ),
    )
