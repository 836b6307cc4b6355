"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from dhcp_hosts_updater.adapters.edgeos import edgeos_provider
from dhcp_hosts_updater.adapters.hosts_file import HostsFileStore
from dhcp_hosts_updater.adapters.unifi import udm_pro_provider
from dhcp_hosts_updater.config import MissingConfigurationError, get_storage_config
from dhcp_hosts_updater.domain.changes import HostsChanges, diff_entries
from dhcp_hosts_updater.domain.naming import build_mapping
from dhcp_hosts_updater.domain.ports import ProviderCatalog, catalog_of
from dhcp_hosts_updater.domain.reconciliation import reconcile

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from dhcp_hosts_updater.domain.ports import ServerProvider, TableStore


log = getLogger(__name__)


def build_provider_catalog() -> ProviderCatalog:
    """Return the providers this installation knows, keyed by id."""

    return catalog_of(edgeos_provider(), udm_pro_provider())


def build_hosts_file_store(hosts_file: str | Path | None = None) -> HostsFileStore:
    return HostsFileStore(path=get_storage_config(hosts_file=hosts_file).resolve_hosts_file())


def update_hosts(
    provider: ServerProvider,
    options: Mapping[str, str],
    *,
    store: TableStore,
    mac_overrides: Mapping[str, str] | None = None,
    replace_spaces: bool = True,
    dry_run: bool = False,
) -> HostsChanges:
    """Fetch hosts from ``provider`` and reconcile them into ``store``."""

    missing = provider.missing_flags(options)
    if missing:
        flags = ", ".join(f"--{flag}" for flag in missing)
        raise MissingConfigurationError(f"Missing required flags for {provider.id}: {flags}")

    log.info("Fetching hosts from %s at %s", provider.id, options.get("address"))
    hosts = provider.get_hosts(options)
    mapping = build_mapping(hosts, mac_overrides=mac_overrides, replace_spaces=replace_spaces)
    log.info("Fetched %d hosts, %d named", len(hosts), len(mapping))

    table = store.load()
    before = table.snapshot()
    reconcile(mapping, table)
    changes = diff_entries(before, table.snapshot())

    for entry in changes.removed:
        log.info("Removing %s (%s)", entry.name, entry.address)
    for entry in changes.added:
        log.info("Adding %s (%s)", entry.name, entry.address)
    for entry in changes.enabled:
        log.info("Enabling %s (%s)", entry.name, entry.address)

    if changes.is_empty:
        log.info("Hosts file already up to date")
    elif dry_run:
        log.info("Dry run, not writing changes: %s", changes.summary())
    else:
        store.save(table)
        log.info("Hosts file updated: %s", changes.summary())

    return changes
