"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_float, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .fmc import FmcConfig, build_fmc_resilience, get_fmc_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .storage import StorageConfig, get_http_cache_path, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "FmcConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "build_fmc_resilience",
    "configure_logging",
    "env_flag",
    "env_float",
    "get_fmc_config",
    "get_http_cache_path",
    "get_reconcile_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
