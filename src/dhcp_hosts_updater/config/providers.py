"""Per-provider HTTP defaults."""

from __future__ import annotations

from .http_resilience import RateLimit, ResilienceConfig

EDGEOS_PROVIDER_ID = "edgeos"
UDM_PRO_PROVIDER_ID = "udm-pro"

ROUTER_TIMEOUT_SECONDS = 15.0


def router_base_url(address: str) -> str:
    """Routers are addressed by ``host[:port]``; a scheme, if given, is kept."""

    address = address.strip().rstrip("/")
    if "://" in address:
        return address
    return f"https://{address}"


def get_edgeos_resilience(address: str, *, verify_tls: bool = False) -> ResilienceConfig:
    return ResilienceConfig(
        name=EDGEOS_PROVIDER_ID,
        base_url=router_base_url(address),
        timeout_seconds=ROUTER_TIMEOUT_SECONDS,
        verify_tls=verify_tls,
    )


def get_udm_pro_resilience(address: str, *, verify_tls: bool = False) -> ResilienceConfig:
    # UniFi OS throttles the login endpoint aggressively
    return ResilienceConfig(
        name=UDM_PRO_PROVIDER_ID,
        base_url=router_base_url(address),
        timeout_seconds=ROUTER_TIMEOUT_SECONDS,
        verify_tls=verify_tls,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )
