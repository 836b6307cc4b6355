from __future__ import annotations

from collections.abc import Mapping
from ipaddress import ip_address
from typing import TYPE_CHECKING

import pytest

from dhcp_hosts_updater import main as main_module
from dhcp_hosts_updater.domain.naming import ObservedHost
from dhcp_hosts_updater.domain.ports import ServerProvider, catalog_of

if TYPE_CHECKING:
    from pathlib import Path


def _catalog(captured: dict[str, object]) -> Mapping[str, ServerProvider]:
    def get_hosts(options: Mapping[str, str]) -> list[ObservedHost]:
        captured["options"] = dict(options)
        return [ObservedHost(name="nas", address=ip_address("10.0.0.5"), mac="aa:bb:cc:dd:ee:ff")]

    return catalog_of(
        ServerProvider(
            id="fake",
            get_hosts=get_hosts,
            required_flags={"address": "addr", "username": "user", "password": "pass"},
            optional_flags={"site": "site", "verify-tls": "tls"},
        )
    )


def test_main_cli_updates_hosts_file(tmp_path: Path) -> None:
    hosts_file = tmp_path / "hosts"
    hosts_file.write_text("10.0.0.5 old-name\n")
    captured: dict[str, object] = {}

    main_module.main(
        [
            "fake",
            "--address",
            "router.lan",
            "--username",
            "admin",
            "--password",
            "secret",
            "--hosts-file",
            str(hosts_file),
            "--mac-override",
            "AA:BB:CC:DD:EE:FF=storage",
        ],
        catalog=_catalog(captured),
    )

    assert captured["options"] == {
        "address": "router.lan",
        "username": "admin",
        "password": "secret",
    }
    assert "10.0.0.5\tstorage" in hosts_file.read_text()
    assert "old-name" not in hosts_file.read_text()


def test_main_cli_reads_flags_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("FAKE_ADDRESS", "env-router")
    monkeypatch.setenv("FAKE_USERNAME", "env-user")
    monkeypatch.setenv("FAKE_PASSWORD", "env-pass")
    monkeypatch.setenv("FAKE_SITE", "lab")
    captured: dict[str, object] = {}

    main_module.main(
        ["fake", "--username", "cli-user", "--hosts-file", str(tmp_path / "hosts"), "--dry-run"],
        catalog=_catalog(captured),
    )

    assert captured["options"] == {
        "address": "env-router",
        "username": "cli-user",
        "password": "env-pass",
        "site": "lab",
    }
    assert not (tmp_path / "hosts").exists()


def test_main_cli_missing_flags_exit_2(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for name in ("FAKE_ADDRESS", "FAKE_USERNAME", "FAKE_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            ["fake", "--address", "x", "--hosts-file", str(tmp_path / "hosts")],
            catalog=_catalog({}),
        )

    assert excinfo.value.code == 2


def test_main_cli_invalid_mac_override_exit_2(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [
                "fake",
                "--address",
                "x",
                "--username",
                "u",
                "--password",
                "p",
                "--hosts-file",
                str(tmp_path / "hosts"),
                "--mac-override",
                "printer",
            ],
            catalog=_catalog({}),
        )

    assert excinfo.value.code == 2


def test_main_cli_invalid_verify_tls_exit_2(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [
                "fake",
                "--address",
                "x",
                "--username",
                "u",
                "--password",
                "p",
                "--verify-tls",
                "maybe",
                "--hosts-file",
                str(tmp_path / "hosts"),
            ],
            catalog=_catalog({}),
        )

    assert excinfo.value.code == 2


def test_main_cli_parse_error_exit_1(tmp_path: Path) -> None:
    hosts_file = tmp_path / "hosts"
    hosts_file.write_text("not-an-ip host\n")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [
                "fake",
                "--address",
                "x",
                "--username",
                "u",
                "--password",
                "p",
                "--hosts-file",
                str(hosts_file),
            ],
            catalog=_catalog({}),
        )

    assert excinfo.value.code == 1
    assert hosts_file.read_text() == "not-an-ip host\n"


def test_main_cli_unknown_provider_is_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["unknown"], catalog=_catalog({}))

    assert excinfo.value.code == 2
