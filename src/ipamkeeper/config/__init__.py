"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .ipam_api import IpamApiConfig, get_ipam_api_config
from .logging import configure_logging
from .reconciler import (
    DEFAULT_NAME_TEMPLATE,
    ReconcilerConfig,
    compile_name_template,
    get_reconciler_config,
)
from .storage import DatabaseConfig, default_data_dir, get_database_config

__all__ = [
    "DEFAULT_NAME_TEMPLATE",
    "ConfigurationError",
    "DatabaseConfig",
    "IpamApiConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcilerConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "compile_name_template",
    "configure_logging",
    "default_data_dir",
    "env_flag",
    "get_database_config",
    "get_ipam_api_config",
    "get_reconciler_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
