"""Domain model and reconciliation core."""

from __future__ import annotations

from .changes import HostsChanges, diff_entries
from .hosts import Entry, HostsTable, IPAddress, parse_address
from .naming import ObservedHost, build_mapping, parse_mac_overrides
from .ports import ProviderCatalog, ServerProvider, SnapshotSource, TableStore, catalog_of
from .reconciliation import reconcile

__all__ = [
    "Entry",
    "HostsChanges",
    "HostsTable",
    "IPAddress",
    "ObservedHost",
    "ProviderCatalog",
    "ServerProvider",
    "SnapshotSource",
    "TableStore",
    "build_mapping",
    "catalog_of",
    "diff_entries",
    "parse_address",
    "parse_mac_overrides",
    "reconcile",
]
