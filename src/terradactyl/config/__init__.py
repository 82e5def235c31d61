"""Application configuration helpers."""

from __future__ import annotations

from .env import int_from_env, setting_from_env
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .panel import (
    API_KEY_ENV_VAR,
    HOST_ENV_VAR,
    MAX_RETRIES_ENV_VAR,
    PanelConfig,
    application_base_url,
    build_panel_resilience,
    get_panel_config,
)

__all__ = [
    "API_KEY_ENV_VAR",
    "HOST_ENV_VAR",
    "MAX_RETRIES_ENV_VAR",
    "ConfigurationError",
    "MissingConfigurationError",
    "PanelConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "application_base_url",
    "build_panel_resilience",
    "configure_logging",
    "get_panel_config",
    "int_from_env",
    "setting_from_env",
]
