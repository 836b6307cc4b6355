"""UniFi OS adapter package."""

from __future__ import annotations

from .client import UniFiAPIError, UniFiClient
from .provider import udm_pro_provider
from .schema import ActiveClient, Site, SitesResponse

__all__ = [
    "ActiveClient",
    "Site",
    "SitesResponse",
    "UniFiAPIError",
    "UniFiClient",
    "udm_pro_provider",
]
