"""Turn hosts reported by a source into the name → address snapshot.

Sources report whatever name the client announced. Before reconciliation the caller may
replace it with an operator-chosen name (keyed by MAC address) and normalise whitespace
so that the name is usable in a hosts file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .hosts import IPAddress

_MAC_SEPARATORS = re.compile(r"[:\-.]")
_MAC_DIGITS = re.compile(r"^[0-9a-f]{12}$")
_HOSTNAME_TOKEN = re.compile(r"[^\s#]+")

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ObservedHost:
    """A client reported by a snapshot source.

    ``mac`` is lower-case and colon separated when the source knows it.
    """

    name: str
    address: IPAddress
    mac: str | None = None


def normalize_mac(value: str) -> str:
    """Return ``value`` as lower-case, colon separated MAC address.

    Accepts the usual colon, dash and dot (Cisco) notations.
    """

    digits = _MAC_SEPARATORS.sub("", value.strip().lower())
    if not _MAC_DIGITS.match(digits):
        raise ValueError(f"Invalid MAC address: {value!r}")
    return ":".join(digits[index : index + 2] for index in range(0, 12, 2))


def parse_mac_overrides(overrides: Iterable[str]) -> dict[str, str]:
    """Parse ``mac=hostname`` items into a lookup keyed by normalised MAC."""

    parsed: dict[str, str] = {}
    for override in overrides:
        parts = override.split("=")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():  # noqa: PLR2004
            raise ValueError(
                f"MAC override {override!r} was not properly formatted as mac=overridden-hostname"
            )
        mac, name = parts
        parsed[normalize_mac(mac)] = name.strip()
    return parsed


def normalize_name(name: str, *, replace_spaces: bool = True) -> str:
    stripped = name.strip()
    if replace_spaces:
        return stripped.replace(" ", "-")
    return stripped


def resolve_name(
    host: ObservedHost,
    *,
    mac_overrides: Mapping[str, str] | None = None,
    replace_spaces: bool = True,
) -> str:
    """Pick the name ``host`` should be published under."""

    if mac_overrides and host.mac is not None:
        override = mac_overrides.get(normalize_mac(host.mac))
        if override is not None:
            return override
    return normalize_name(host.name, replace_spaces=replace_spaces)


def build_mapping(
    hosts: Iterable[ObservedHost],
    *,
    mac_overrides: Mapping[str, str] | None = None,
    replace_spaces: bool = True,
) -> dict[str, IPAddress]:
    """Build the snapshot handed to the reconciler. Later hosts win on equal names.

    Names that cannot be written as a single hosts file field (inner whitespace or a
    ``#``) are skipped.
    """

    mapping: dict[str, IPAddress] = {}
    for host in hosts:
        name = resolve_name(host, mac_overrides=mac_overrides, replace_spaces=replace_spaces)
        if not name:
            continue
        if not _HOSTNAME_TOKEN.fullmatch(name):
            log.warning("Skipping %r at %s: not usable as a hosts file name", name, host.address)
            continue
        mapping[name] = host.address
    return mapping
