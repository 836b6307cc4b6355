from __future__ import annotations

from ipaddress import ip_address

import pytest

from dhcp_hosts_updater.domain.naming import (
    ObservedHost,
    build_mapping,
    normalize_mac,
    normalize_name,
    parse_mac_overrides,
)


def test_parse_mac_overrides_normalises_keys() -> None:
    overrides = parse_mac_overrides(["AA:BB:CC:DD:EE:FF=printer", "aa-bb-cc-00-11-22=tv"])

    assert overrides == {"aa:bb:cc:dd:ee:ff": "printer", "aa:bb:cc:00:11:22": "tv"}


@pytest.mark.parametrize("value", ["aa:bb:cc:dd:ee:ff", "a=b=c", "=name", "aa:bb:cc:dd:ee:ff="])
def test_parse_mac_overrides_rejects_malformed_items(value: str) -> None:
    with pytest.raises(ValueError, match="mac=overridden-hostname"):
        parse_mac_overrides([value])


def test_parse_mac_overrides_rejects_invalid_mac() -> None:
    with pytest.raises(ValueError, match="Invalid MAC address"):
        parse_mac_overrides(["zz:bb:cc:dd:ee:ff=printer"])


def test_normalize_mac_accepts_common_notations() -> None:
    assert normalize_mac("AABB.CCDD.EEFF") == "aa:bb:cc:dd:ee:ff"
    assert normalize_mac("aa-bb-cc-dd-ee-ff") == "aa:bb:cc:dd:ee:ff"


def test_normalize_name_replaces_spaces() -> None:
    assert normalize_name("  Living Room  TV ") == "Living-Room--TV"
    assert normalize_name(" Living Room ", replace_spaces=False) == "Living Room"


def test_build_mapping_applies_overrides_and_skips_empty_names() -> None:
    hosts = [
        ObservedHost(name="Johns iPhone", address=ip_address("10.0.0.2"), mac="aa:bb:cc:dd:ee:01"),
        ObservedHost(name="", address=ip_address("10.0.0.3"), mac="aa:bb:cc:dd:ee:02"),
        ObservedHost(name="", address=ip_address("10.0.0.4"), mac="AA:BB:CC:DD:EE:03"),
        ObservedHost(name="nas", address=ip_address("10.0.0.5")),
    ]

    mapping = build_mapping(hosts, mac_overrides={"aa:bb:cc:dd:ee:03": "printer"})

    assert mapping == {
        "Johns-iPhone": ip_address("10.0.0.2"),
        "printer": ip_address("10.0.0.4"),
        "nas": ip_address("10.0.0.5"),
    }


def test_build_mapping_last_host_wins_on_duplicate_names() -> None:
    hosts = [
        ObservedHost(name="nas", address=ip_address("10.0.0.5")),
        ObservedHost(name="nas", address=ip_address("10.0.0.6")),
    ]

    assert build_mapping(hosts) == {"nas": ip_address("10.0.0.6")}


@pytest.mark.parametrize(
    ("hosts", "overrides"),
    [
        ([ObservedHost(name="Living Room", address=ip_address("10.0.0.7"))], None),
        ([ObservedHost(name="Bob#1", address=ip_address("10.0.0.7"))], None),
        (
            [ObservedHost(name="tv", address=ip_address("10.0.0.7"), mac="aa:bb:cc:dd:ee:07")],
            {"aa:bb:cc:dd:ee:07": "Living Room TV"},
        ),
    ],
)
def test_build_mapping_skips_names_unusable_in_hosts_file(
    hosts: list[ObservedHost], overrides: dict[str, str] | None
) -> None:
    mapping = build_mapping(hosts, mac_overrides=overrides, replace_spaces=False)

    assert mapping == {}
