"""Hosts file backed table store.

The file is read in hosts(5) format. Lines that are commented out but otherwise hold
a valid ``address name...`` record are loaded as disabled entries, which is how an
operator switches an entry off without losing it.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dhcp_hosts_updater.domain.hosts import Entry, HostsTable, IPAddress, parse_address

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

HEADER: Final[str] = "# Managed by dhcp-hosts-updater. Comment out a line to disable it."


@dataclass(slots=True, frozen=True)
class HostsFileLineError:
    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason}: {self.line!r}"


class HostsFileParseError(ValueError):
    """Raised with every malformed line of a hosts file at once."""

    def __init__(self, path: Path, errors: Iterable[HostsFileLineError]) -> None:
        self.path = path
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} error(s) parsing {path}: {details}")


def _split_record(body: str) -> tuple[str, list[str]] | None:
    fields = body.split("#", 1)[0].split()
    if not fields:
        return None
    return fields[0], fields[1:]


def _disabled_record(body: str) -> tuple[IPAddress, list[str]] | None:
    record = _split_record(body)
    if record is None:
        return None
    raw_address, names = record
    if not names:
        return None
    try:
        return parse_address(raw_address), names
    except ValueError:
        return None


def parse_hosts(text: str, *, path: Path) -> HostsTable:
    """Parse hosts file content, collecting every malformed line before failing."""

    table = HostsTable()
    seen: dict[tuple[str, IPAddress], Entry] = {}
    errors: list[HostsFileLineError] = []

    def add(name: str, address: IPAddress, *, enabled: bool) -> None:
        key = (name.lower(), address)
        existing = seen.get(key)
        if existing is not None:
            existing.enabled = existing.enabled or enabled
            return
        entry = Entry(name=name, address=address, enabled=enabled)
        seen[key] = entry
        table.add(entry)

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("#"):
            disabled = _disabled_record(line.lstrip("#"))
            if disabled is None:
                continue
            address, names = disabled
            for name in names:
                add(name, address, enabled=False)
            continue

        record = _split_record(line)
        if record is None:
            continue
        raw_address, names = record
        if not names:
            errors.append(HostsFileLineError(line_number, raw_line, "missing hostname"))
            continue
        try:
            address = parse_address(raw_address)
        except ValueError:
            errors.append(HostsFileLineError(line_number, raw_line, "invalid address"))
            continue
        for name in names:
            add(name, address, enabled=True)

    if errors:
        raise HostsFileParseError(path, errors)
    return table


def format_hosts(table: HostsTable) -> str:
    lines = [HEADER]
    for entry in table:
        record = f"{entry.address}\t{entry.name}"
        lines.append(record if entry.enabled else f"# {record}")
    return "\n".join(lines) + "\n"


@dataclass(slots=True)
class HostsFileStore:
    path: Path

    def load(self) -> HostsTable:
        if not self.path.exists():
            log.warning("Hosts file %s does not exist, starting from an empty table", self.path)
            return HostsTable()
        text = self.path.read_text(encoding="utf-8")
        table = parse_hosts(text, path=self.path)
        log.debug("Loaded %d entries from %s", len(table), self.path)
        return table

    def save(self, table: HostsTable) -> None:
        """Replace the hosts file atomically, keeping its permissions."""

        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        content = format_hosts(table)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            if self.path.exists():
                shutil.copymode(self.path, tmp_path)
            else:
                tmp_path.chmod(0o644)
            tmp_path.replace(self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        log.debug("Wrote %d entries to %s", len(table), self.path)
