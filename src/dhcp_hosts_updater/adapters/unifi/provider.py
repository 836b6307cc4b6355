"""UniFi Dream Machine Pro provider definition."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from dhcp_hosts_updater.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    default_client_factory,
)
from dhcp_hosts_updater.config import UDM_PRO_PROVIDER_ID, get_udm_pro_resilience
from dhcp_hosts_updater.config.flags import (
    ADDRESS_FLAG,
    PASSWORD_FLAG,
    SITE_FLAG,
    USERNAME_FLAG,
    VERIFY_TLS_FLAG,
    parse_bool_flag,
)
from dhcp_hosts_updater.domain.naming import ObservedHost
from dhcp_hosts_updater.domain.ports import ServerProvider

from .client import UniFiClient


def udm_pro_provider(
    *,
    client_factory: Callable[[ResilienceConfig], ResilientClient] = default_client_factory,
) -> ServerProvider:
    """Build the provider reading active clients from a UniFi Dream Machine Pro."""

    def get_hosts(options: Mapping[str, str]) -> list[ObservedHost]:
        verify_tls = parse_bool_flag(options.get(VERIFY_TLS_FLAG), flag=VERIFY_TLS_FLAG)
        client = UniFiClient(
            resilience=get_udm_pro_resilience(options[ADDRESS_FLAG], verify_tls=verify_tls),
            client_factory=client_factory,
        )
        return client.fetch_hosts(
            username=options[USERNAME_FLAG],
            password=options[PASSWORD_FLAG],
            site=options.get(SITE_FLAG),
        )

    return ServerProvider(
        id=UDM_PRO_PROVIDER_ID,
        get_hosts=get_hosts,
        required_flags={
            ADDRESS_FLAG: "the address of the udm pro",
            USERNAME_FLAG: "the username for the udm pro",
            PASSWORD_FLAG: "the password for the udm pro",
        },
        optional_flags={
            SITE_FLAG: "the site to read clients from (defaults to the first site)",
            VERIFY_TLS_FLAG: "verify the server's TLS certificate (true/false, default false)",
        },
    )
