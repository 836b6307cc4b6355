"""Hosts table model: entries and the ordered, address-indexed table holding them."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

type IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def parse_address(value: str) -> IPAddress:
    """Parse an IPv4/IPv6 literal, raising ``ValueError`` when it is not one."""

    return ipaddress.ip_address(value.strip())


@dataclass(slots=True)
class Entry:
    """One row of the local resolution table."""

    name: str
    address: IPAddress
    enabled: bool = True

    def matches_name(self, name: str) -> bool:
        return self.name.lower() == name.lower()


class HostsTable:
    """Ordered collection of entries, indexed by address.

    Entries keep their insertion order. Removal is by identity so that two entries
    with equal fields stay distinguishable while one of them is being dropped.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: list[Entry] = []
        self._by_address: dict[IPAddress, list[Entry]] = {}
        for entry in entries:
            self.add(entry)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HostsTable({self._entries!r})"

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def add(self, entry: Entry) -> None:
        self._entries.append(entry)
        self._by_address.setdefault(entry.address, []).append(entry)

    def remove(self, entry: Entry) -> None:
        """Remove ``entry`` (by identity). Raises ``KeyError`` if it is not in the table."""

        for index, candidate in enumerate(self._entries):
            if candidate is entry:
                del self._entries[index]
                break
        else:
            raise KeyError(f"Entry not in table: {entry!r}")

        siblings = self._by_address[entry.address]
        siblings[:] = [candidate for candidate in siblings if candidate is not entry]
        if not siblings:
            del self._by_address[entry.address]

    def contains_address(self, address: IPAddress) -> bool:
        return address in self._by_address

    def filter_by_address(self, address: IPAddress) -> tuple[Entry, ...]:
        """Return the entries holding ``address`` in table order.

        The result is a snapshot: mutating the table while iterating it is safe.
        """

        return tuple(self._by_address.get(address, ()))

    def snapshot(self) -> tuple[Entry, ...]:
        """Return detached copies of the current entries."""

        return tuple(replace(entry) for entry in self._entries)
