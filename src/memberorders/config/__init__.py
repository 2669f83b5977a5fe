"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_positive_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .flex import FlexConfig, get_flex_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "FlexConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_flex_config",
    "get_reconcile_config",
    "get_storage_config",
    "optional_env_var",
    "optional_positive_int",
    "require_env_vars",
]
