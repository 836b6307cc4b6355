"""Before/after comparison of a hosts table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .hosts import Entry, IPAddress

type EntryKey = tuple[str, IPAddress]


@dataclass(slots=True, frozen=True)
class HostsChanges:
    """Entries added, removed and re-enabled by one reconciliation pass."""

    added: tuple[Entry, ...] = field(default_factory=tuple)
    removed: tuple[Entry, ...] = field(default_factory=tuple)
    enabled: tuple[Entry, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.enabled)

    def summary(self) -> str:
        return f"added={len(self.added)}, removed={len(self.removed)}, enabled={len(self.enabled)}"


def _key(entry: Entry) -> EntryKey:
    return (entry.name, entry.address)


def diff_entries(before: Iterable[Entry], after: Iterable[Entry]) -> HostsChanges:
    """Compare two entry sequences, keyed by exact ``(name, address)``."""

    before_by_key = {_key(entry): entry for entry in before}
    after_by_key = {_key(entry): entry for entry in after}

    added = tuple(entry for key, entry in after_by_key.items() if key not in before_by_key)
    removed = tuple(entry for key, entry in before_by_key.items() if key not in after_by_key)
    enabled = tuple(
        entry
        for key, entry in after_by_key.items()
        if key in before_by_key and entry.enabled and not before_by_key[key].enabled
    )
    return HostsChanges(added=added, removed=removed, enabled=enabled)
