"""Flag names shared by the router providers."""

from __future__ import annotations

from typing import Final

ADDRESS_FLAG: Final[str] = "address"
USERNAME_FLAG: Final[str] = "username"
PASSWORD_FLAG: Final[str] = "password"  # noqa: S105
SITE_FLAG: Final[str] = "site"
VERIFY_TLS_FLAG: Final[str] = "verify-tls"

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})


def parse_bool_flag(value: str | None, *, flag: str, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid value for --{flag}: {value!r} (expected true or false)")
