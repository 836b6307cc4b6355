"""Pydantic models describing the EdgeOS web API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EdgeOSBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DhcpLease(EdgeOSBaseModel):
    client_hostname: str = Field(default="", alias="client-hostname")
    mac: str | None = None


class DhcpLeasesOutput(EdgeOSBaseModel):
    dhcp_server_leases: dict[str, dict[str, DhcpLease]] = Field(
        default_factory=dict[str, dict[str, DhcpLease]],
        alias="dhcp-server-leases",
    )

    @field_validator("dhcp_server_leases", mode="before")
    @classmethod
    def _empty_pools(cls, value: object) -> object:
        # a pool without leases is reported as "" instead of {}
        if not isinstance(value, Mapping):
            return value
        pools = cast(Mapping[str, object], value)
        return {
            pool: {} if isinstance(leases, str) and not leases.strip() else leases
            for pool, leases in pools.items()
        }


class DhcpLeasesResponse(EdgeOSBaseModel):
    success: str | int | bool | None = None
    output: DhcpLeasesOutput = Field(default_factory=DhcpLeasesOutput)

    def leases(self) -> list[tuple[str, DhcpLease]]:
        """Return ``(ip, lease)`` pairs across all pools."""

        return [
            (ip, lease)
            for pool in self.output.dhcp_server_leases.values()
            for ip, lease in pool.items()
        ]


class StaticMapping(EdgeOSBaseModel):
    ip_address: str | None = Field(default=None, alias="ip-address")
    mac_address: str | None = Field(default=None, alias="mac-address")


class Subnet(EdgeOSBaseModel):
    static_mapping: dict[str, StaticMapping] = Field(
        default_factory=dict[str, StaticMapping], alias="static-mapping"
    )


class SharedNetwork(EdgeOSBaseModel):
    subnet: dict[str, Subnet] = Field(default_factory=dict[str, Subnet])


class DhcpServer(EdgeOSBaseModel):
    shared_network_name: dict[str, SharedNetwork] = Field(
        default_factory=dict[str, SharedNetwork], alias="shared-network-name"
    )


class Service(EdgeOSBaseModel):
    dhcp_server: DhcpServer = Field(default_factory=DhcpServer, alias="dhcp-server")


class ConfigTree(EdgeOSBaseModel):
    service: Service = Field(default_factory=Service)


class ConfigResponse(EdgeOSBaseModel):
    get: ConfigTree = Field(default_factory=ConfigTree, alias="GET")

    def static_mappings(self) -> list[tuple[str, StaticMapping]]:
        """Return ``(name, mapping)`` pairs across all shared networks and subnets."""

        return [
            (name, mapping)
            for network in self.get.service.dhcp_server.shared_network_name.values()
            for subnet in network.subnet.values()
            for name, mapping in subnet.static_mapping.items()
        ]
