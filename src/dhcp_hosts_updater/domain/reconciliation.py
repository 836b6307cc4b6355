"""Align a hosts table with the current name → address snapshot.

For every named address in the snapshot the table ends up holding exactly one entry
for that address whose name matches (case-insensitively). Stale aliases of the address
are dropped, a matching disabled entry is re-enabled, and addresses that are absent
from the snapshot are left alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .hosts import Entry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .hosts import HostsTable, IPAddress


def reconcile(mapping: Mapping[str, IPAddress], table: HostsTable) -> None:
    """Update ``table`` in place so it reflects ``mapping``."""

    for name, address in mapping.items():
        if not name:
            continue

        if _keep_matching_entry(table, address, name):
            continue

        table.add(Entry(name=name, address=address, enabled=True))


def _keep_matching_entry(table: HostsTable, address: IPAddress, name: str) -> bool:
    """Drop entries of ``address`` named differently; report whether one named ``name`` stays."""

    if not table.contains_address(address):
        return False

    found = False
    for entry in table.filter_by_address(address):
        if entry.matches_name(name):
            if not entry.enabled:
                entry.enabled = True
            found = True
        else:
            table.remove(entry)
    return found
