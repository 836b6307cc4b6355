"""HTTP client for the network application of a UniFi Dream Machine Pro."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dhcp_hosts_updater.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    default_client_factory,
)
from dhcp_hosts_updater.domain.hosts import parse_address
from dhcp_hosts_updater.domain.naming import ObservedHost, normalize_mac

from .schema import ActiveClient, ActiveClientsAdapter, SitesResponse

if TYPE_CHECKING:
    import httpx

log = getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
SITES_PATH = "/proxy/network/api/self/sites"
ACTIVE_CLIENTS_PATH = "/proxy/network/v2/api/site/{site}/clients/active"


class UniFiAPIError(RuntimeError):
    """Raised when the UniFi API rejects a request or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class UniFiClient:
    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    @property
    def base_url(self) -> str:
        if self.resilience.base_url is None:
            raise UniFiAPIError("UniFi client needs a base URL")
        return self.resilience.base_url.rstrip("/")

    def fetch_hosts(
        self,
        *,
        username: str,
        password: str,
        site: str | None = None,
    ) -> list[ObservedHost]:
        """Log in and return the active clients of ``site`` (default: the first site)."""

        return asyncio.run(
            self._fetch_hosts_async(username=username, password=password, site=site)
        )

    async def _fetch_hosts_async(
        self,
        *,
        username: str,
        password: str,
        site: str | None,
    ) -> list[ObservedHost]:
        async with self.client_factory(self.resilience) as client:
            await self._login(client, username=username, password=password)
            effective_site = site or await self._default_site(client)
            clients = await self._active_clients(client, site=effective_site)

        hosts: list[ObservedHost] = []
        for active in clients:
            host = _observed_host(active)
            if host is not None:
                hosts.append(host)
        log.info("UniFi site %r reported %d active clients", effective_site, len(hosts))
        return hosts

    async def _login(self, client: ResilientClient, *, username: str, password: str) -> None:
        response = await client.post(
            f"{self.base_url}{LOGIN_PATH}",
            json={"username": username, "password": password},
        )
        _ensure_ok(response, what="login")

    async def _default_site(self, client: ResilientClient) -> str:
        response = await client.get(f"{self.base_url}{SITES_PATH}")
        _ensure_ok(response, what="sites")
        try:
            sites = SitesResponse.model_validate(response.json())
        except ValueError as exc:
            raise UniFiAPIError(f"could not decode response of sites: {exc}") from exc
        if not sites.data:
            raise UniFiAPIError("controller did not report any site")
        return sites.data[0].name

    async def _active_clients(self, client: ResilientClient, *, site: str) -> list[ActiveClient]:
        response = await client.get(f"{self.base_url}{ACTIVE_CLIENTS_PATH.format(site=site)}")
        _ensure_ok(response, what="active clients")
        try:
            return ActiveClientsAdapter.validate_python(response.json())
        except ValueError as exc:
            raise UniFiAPIError(f"could not decode response of active clients: {exc}") from exc


def _ensure_ok(response: httpx.Response, *, what: str) -> None:
    if response.status_code != 200:  # noqa: PLR2004
        raise UniFiAPIError(
            f"request for {what} returned a non 200 status code \"{response.status_code}\"",
            status_code=response.status_code,
        )


def _observed_host(active: ActiveClient) -> ObservedHost | None:
    try:
        mac = normalize_mac(active.mac)
    except ValueError as exc:
        raise UniFiAPIError(f"client {active.name!r} reported an invalid MAC address") from exc

    if not active.ip:
        log.debug("Skipping %s: no IP address assigned", mac)
        return None
    try:
        address = parse_address(active.ip)
    except ValueError:
        log.warning("Skipping %s: UniFi reported an invalid address %r", mac, active.ip)
        return None
    return ObservedHost(name=active.name, address=address, mac=mac)
