from __future__ import annotations

from ipaddress import ip_address
from typing import TYPE_CHECKING

import httpx
import pytest

from dhcp_hosts_updater.adapters.http_resilience import ResilienceConfig, ResilientClient
from dhcp_hosts_updater.domain.hosts import Entry, HostsTable

if TYPE_CHECKING:
    from collections.abc import Callable

type Handler = Callable[[httpx.Request], httpx.Response]
type ClientFactory = Callable[[ResilienceConfig], ResilientClient]


def _make_client_factory(handler: Handler) -> ClientFactory:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


@pytest.fixture
def make_client_factory() -> Callable[[Handler], ClientFactory]:
    return _make_client_factory


def _entries(*rows: tuple[str, str, bool]) -> HostsTable:
    return HostsTable(
        Entry(name=name, address=ip_address(address), enabled=enabled)
        for name, address, enabled in rows
    )


@pytest.fixture
def make_table() -> Callable[..., HostsTable]:
    return _entries
