"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_NON_IDENTIFIER = re.compile(r"[^A-Z0-9]+")


def provider_env_var(provider_id: str, flag: str) -> str:
    """Name of the environment variable backing ``flag`` of a provider.

    >>> provider_env_var("udm-pro", "address")
    'UDM_PRO_ADDRESS'
    """

    return _NON_IDENTIFIER.sub("_", f"{provider_id}_{flag}".upper()).strip("_")


def resolve_provider_options(
    provider_id: str,
    flags: Sequence[str],
    given: Mapping[str, str | None],
) -> dict[str, str]:
    """Merge explicitly given flag values with ``<PROVIDER>_<FLAG>`` environment variables.

    Explicit values win. Flags without any value are left out.
    """

    options: dict[str, str] = {}
    for flag in flags:
        value = given.get(flag)
        if value is None or not value.strip():
            value = os.getenv(provider_env_var(provider_id, flag))
        if value is not None and value.strip():
            options[flag] = value
    return options
