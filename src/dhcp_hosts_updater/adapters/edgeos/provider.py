"""EdgeOS provider definition."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from dhcp_hosts_updater.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    default_client_factory,
)
from dhcp_hosts_updater.config import EDGEOS_PROVIDER_ID, get_edgeos_resilience
from dhcp_hosts_updater.config.flags import (
    ADDRESS_FLAG,
    PASSWORD_FLAG,
    USERNAME_FLAG,
    VERIFY_TLS_FLAG,
    parse_bool_flag,
)
from dhcp_hosts_updater.domain.naming import ObservedHost
from dhcp_hosts_updater.domain.ports import ServerProvider

from .client import EdgeOSClient


def edgeos_provider(
    *,
    client_factory: Callable[[ResilienceConfig], ResilientClient] = default_client_factory,
) -> ServerProvider:
    """Build the provider reading DHCP leases and static mappings from an EdgeRouter."""

    def get_hosts(options: Mapping[str, str]) -> list[ObservedHost]:
        verify_tls = parse_bool_flag(options.get(VERIFY_TLS_FLAG), flag=VERIFY_TLS_FLAG)
        client = EdgeOSClient(
            resilience=get_edgeos_resilience(options[ADDRESS_FLAG], verify_tls=verify_tls),
            client_factory=client_factory,
        )
        return client.fetch_hosts(
            username=options[USERNAME_FLAG],
            password=options[PASSWORD_FLAG],
        )

    return ServerProvider(
        id=EDGEOS_PROVIDER_ID,
        get_hosts=get_hosts,
        required_flags={
            ADDRESS_FLAG: "the address of the edgeos server",
            USERNAME_FLAG: "the username for the edgeos server",
            PASSWORD_FLAG: "the password for the edgeos server",
        },
        optional_flags={
            VERIFY_TLS_FLAG: "verify the server's TLS certificate (true/false, default false)",
        },
    )
