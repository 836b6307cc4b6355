"""Ports implemented by adapters: snapshot sources, table stores and providers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .hosts import HostsTable
    from .naming import ObservedHost


@runtime_checkable
class SnapshotSource(Protocol):
    """Callable port returning the hosts a server currently knows about.

    ``options`` always holds every required flag of the provider; optional flags must
    be looked up with ``options.get``.
    """

    def __call__(self, options: Mapping[str, str]) -> list[ObservedHost]: ...


@runtime_checkable
class TableStore(Protocol):
    """Load and persist the hosts table."""

    def load(self) -> HostsTable: ...

    def save(self, table: HostsTable) -> None: ...


@dataclass(slots=True, frozen=True)
class ServerProvider:
    """Everything needed to read hosts from one kind of server."""

    id: str
    get_hosts: SnapshotSource
    required_flags: Mapping[str, str] = field(default_factory=dict[str, str])
    optional_flags: Mapping[str, str] = field(default_factory=dict[str, str])

    def missing_flags(self, options: Mapping[str, str | None]) -> list[str]:
        missing: list[str] = []
        for flag in self.required_flags:
            value = options.get(flag)
            if value is None or not value.strip():
                missing.append(flag)
        return missing


type ProviderCatalog = Mapping[str, ServerProvider]


def catalog_of(*providers: ServerProvider) -> ProviderCatalog:
    """Index providers by id, rejecting duplicates."""

    catalog: dict[str, ServerProvider] = {}
    for provider in providers:
        if provider.id in catalog:
            raise ValueError(f"Duplicate provider id: {provider.id}")
        catalog[provider.id] = provider
    return MappingProxyType(catalog)
