"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def setting_from_env(value: str | None, name: str) -> str | None:
    """Return ``value`` when given, otherwise the environment variable ``name``.

    Blank strings count as missing in both places.
    """

    if value is not None and value.strip():
        return value
    env_value = os.getenv(name)
    if env_value is None or not env_value.strip():
        return None
    return env_value


def int_from_env(name: str, *, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value
