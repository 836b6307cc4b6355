from __future__ import annotations

import stat
from ipaddress import ip_address
from typing import TYPE_CHECKING

import pytest

from dhcp_hosts_updater.adapters.hosts_file import (
    HEADER,
    HostsFileParseError,
    HostsFileStore,
    format_hosts,
    parse_hosts,
)
from dhcp_hosts_updater.domain.hosts import Entry, HostsTable

if TYPE_CHECKING:
    from pathlib import Path

HOSTS = """\
# Static table lookup for hostnames.
127.0.0.1\tlocalhost localhost.localdomain  # loopback
::1 localhost ip6-localhost

# The following lines are desirable for IPv6 capable hosts
#192.168.1.50 old-printer
# 192.168.1.51\tparked
192.168.1.10 nas
"""


def _rows(table: HostsTable) -> list[tuple[str, str, bool]]:
    return [(entry.name, str(entry.address), entry.enabled) for entry in table]


def test_parse_reads_enabled_and_disabled_entries(tmp_path: Path) -> None:
    table = parse_hosts(HOSTS, path=tmp_path / "hosts")

    assert _rows(table) == [
        ("localhost", "127.0.0.1", True),
        ("localhost.localdomain", "127.0.0.1", True),
        ("localhost", "::1", True),
        ("ip6-localhost", "::1", True),
        ("old-printer", "192.168.1.50", False),
        ("parked", "192.168.1.51", False),
        ("nas", "192.168.1.10", True),
    ]


def test_parse_collects_every_error(tmp_path: Path) -> None:
    text = "127.0.0.1 localhost\n999.1.1.1 broken\n10.0.0.1\nnot-an-ip host\n"

    with pytest.raises(HostsFileParseError) as excinfo:
        parse_hosts(text, path=tmp_path / "hosts")

    errors = excinfo.value.errors
    assert [error.line_number for error in errors] == [2, 3, 4]
    assert [error.reason for error in errors] == [
        "invalid address",
        "missing hostname",
        "invalid address",
    ]
    assert "3 error(s)" in str(excinfo.value)


def test_parse_merges_duplicates_enabled_wins(tmp_path: Path) -> None:
    table = parse_hosts("# 10.0.0.1 nas\n10.0.0.1 NAS\n", path=tmp_path / "hosts")

    assert _rows(table) == [("nas", "10.0.0.1", True)]


def test_format_comments_out_disabled_entries() -> None:
    table = HostsTable(
        [
            Entry(name="nas", address=ip_address("10.0.0.1")),
            Entry(name="parked", address=ip_address("10.0.0.2"), enabled=False),
        ]
    )

    assert format_hosts(table) == f"{HEADER}\n10.0.0.1\tnas\n# 10.0.0.2\tparked\n"


def test_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "hosts"
    path.write_text(HOSTS)
    path.chmod(0o640)
    store = HostsFileStore(path=path)

    table = store.load()
    store.save(table)
    reloaded = store.load()

    assert _rows(reloaded) == _rows(table)
    assert stat.S_IMODE(path.stat().st_mode) == 0o640
    assert [p.name for p in tmp_path.iterdir()] == ["hosts"]


def test_store_missing_file_loads_empty_table(tmp_path: Path) -> None:
    store = HostsFileStore(path=tmp_path / "missing" / "hosts")

    assert len(store.load()) == 0

    store.save(HostsTable([Entry(name="a", address=ip_address("10.0.0.1"))]))

    assert _rows(store.load()) == [("a", "10.0.0.1", True)]
