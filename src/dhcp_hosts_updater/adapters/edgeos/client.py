"""HTTP client for the EdgeOS (EdgeRouter) web API."""

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

from .schema import ConfigResponse, DhcpLeasesResponse

if TYPE_CHECKING:
    import httpx
    from pydantic import BaseModel

log = getLogger(__name__)

LOGIN_PATH = "/"
DHCP_LEASES_PATH = "/api/edge/data.json"
CONFIG_PATH = "/api/edge/get.json"


class EdgeOSAPIError(RuntimeError):
    """Raised when the EdgeOS API does not return the expected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class EdgeOSClient:
    resilience: ResilienceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    @property
    def base_url(self) -> str:
        if self.resilience.base_url is None:
            raise EdgeOSAPIError("EdgeOS client needs a base URL")
        return self.resilience.base_url.rstrip("/")

    def fetch_hosts(self, *, username: str, password: str) -> list[ObservedHost]:
        """Log in and return dynamic leases followed by static mappings."""

        return asyncio.run(self._fetch_hosts_async(username=username, password=password))

    async def _fetch_hosts_async(self, *, username: str, password: str) -> list[ObservedHost]:
        async with self.client_factory(self.resilience) as client:
            await self._login(client, username=username, password=password)
            dynamic, static = await asyncio.gather(
                self._dynamic_hosts(client),
                self._static_hosts(client),
            )

        log.info("EdgeOS reported %d leases and %d static mappings", len(dynamic), len(static))
        return [*dynamic, *static]

    async def _login(self, client: ResilientClient, *, username: str, password: str) -> None:
        response = await client.post(
            f"{self.base_url}{LOGIN_PATH}",
            data={"username": username, "password": password},
        )
        if response.is_client_error or response.is_server_error:
            raise EdgeOSAPIError(
                f"login returned status code \"{response.status_code}\"",
                status_code=response.status_code,
            )

    async def _dynamic_hosts(self, client: ResilientClient) -> list[ObservedHost]:
        response = await client.get(
            f"{self.base_url}{DHCP_LEASES_PATH}",
            params={"data": "dhcp_leases"},
        )
        payload = _decode(response, DhcpLeasesResponse, what="dynamic hosts")

        hosts: list[ObservedHost] = []
        for ip, lease in payload.leases():
            host = _observed_host(lease.client_hostname, ip, lease.mac)
            if host is not None:
                hosts.append(host)
        return hosts

    async def _static_hosts(self, client: ResilientClient) -> list[ObservedHost]:
        response = await client.get(f"{self.base_url}{CONFIG_PATH}")
        payload = _decode(response, ConfigResponse, what="static hosts")

        hosts: list[ObservedHost] = []
        for name, mapping in payload.static_mappings():
            if mapping.ip_address is None:
                log.debug("Static mapping %r has no ip-address, skipping", name)
                continue
            host = _observed_host(name, mapping.ip_address, mapping.mac_address)
            if host is not None:
                hosts.append(host)
        return hosts


def _decode[TModel: BaseModel](
    response: httpx.Response,
    model: type[TModel],
    *,
    what: str,
) -> TModel:
    if response.status_code != 200:  # noqa: PLR2004
        raise EdgeOSAPIError(
            f"request for {what} returned a non 200 status code \"{response.status_code}\"",
            status_code=response.status_code,
        )
    try:
        return model.model_validate(response.json())
    except ValueError as exc:
        raise EdgeOSAPIError(f"could not decode response of {what}: {exc}") from exc


def _observed_host(name: str, raw_ip: str, mac: str | None) -> ObservedHost | None:
    try:
        address = parse_address(raw_ip)
    except ValueError:
        log.warning("Skipping %r: EdgeOS reported an invalid address %r", name, raw_ip)
        return None
    return ObservedHost(name=name, address=address, mac=_normalized_mac(name, mac))


def _normalized_mac(name: str, mac: str | None) -> str | None:
    if not mac:
        return None
    try:
        return normalize_mac(mac)
    except ValueError:
        log.warning("Ignoring invalid MAC address %r reported for %r", mac, name)
        return None
