"""EdgeOS adapter package."""

from __future__ import annotations

from .client import EdgeOSAPIError, EdgeOSClient
from .provider import edgeos_provider
from .schema import ConfigResponse, DhcpLease, DhcpLeasesResponse, StaticMapping

__all__ = [
    "ConfigResponse",
    "DhcpLease",
    "DhcpLeasesResponse",
    "EdgeOSAPIError",
    "EdgeOSClient",
    "StaticMapping",
    "edgeos_provider",
]
