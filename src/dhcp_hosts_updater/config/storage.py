"""Hosts file location."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

POSIX_HOSTS_FILE: Final[Path] = Path("/etc/hosts")
WINDOWS_HOSTS_RELATIVE: Final[Path] = Path("System32") / "drivers" / "etc" / "hosts"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    hosts_file: Path

    def resolve_hosts_file(self) -> Path:
        return self.hosts_file.expanduser().resolve()


def _default_hosts_file() -> Path:
    if os.name == "nt":
        system_root = os.getenv("SystemRoot") or r"C:\Windows"
        return Path(system_root) / WINDOWS_HOSTS_RELATIVE
    return POSIX_HOSTS_FILE


def get_storage_config(*, hosts_file: str | Path | None = None) -> StorageConfig:
    """Resolve the hosts file: explicit argument, then ``HOSTS_FILE``, then the OS default."""

    if hosts_file:
        return StorageConfig(hosts_file=Path(hosts_file))
    env_path = os.getenv("HOSTS_FILE")
    path = Path(env_path) if env_path else _default_hosts_file()
    return StorageConfig(hosts_file=path)
