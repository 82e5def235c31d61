"""Errors raised while assembling panel settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting is present but unusable (a non-numeric retry count, say)."""


class MissingConfigurationError(ConfigurationError):
    """Raised when the panel host or API key is neither passed nor set in the environment."""
