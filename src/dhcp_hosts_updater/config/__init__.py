"""Application configuration helpers."""

from __future__ import annotations

from .env import provider_env_var, resolve_provider_options
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .providers import (
    EDGEOS_PROVIDER_ID,
    UDM_PRO_PROVIDER_ID,
    get_edgeos_resilience,
    get_udm_pro_resilience,
    router_base_url,
)
from .storage import StorageConfig, get_storage_config

__all__ = [
    "EDGEOS_PROVIDER_ID",
    "UDM_PRO_PROVIDER_ID",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_edgeos_resilience",
    "get_storage_config",
    "get_udm_pro_resilience",
    "provider_env_var",
    "resolve_provider_options",
    "router_base_url",
]
