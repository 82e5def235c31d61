"""Pterodactyl panel configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import int_from_env, setting_from_env
from .errors import MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

HOST_ENV_VAR = "PTERODACTYL_HOST"
API_KEY_ENV_VAR = "PTERODACTYL_API_KEY"
MAX_RETRIES_ENV_VAR = "PTERODACTYL_MAX_RETRIES"

APPLICATION_API_PATH = "/api/application/"
PANEL_TIMEOUT_SECONDS = 30.0
# The panel throttles the application API to 240 requests per minute by default
PANEL_RATE_LIMIT = RateLimit(max_calls=240, per_seconds=60.0)


@dataclass(frozen=True, slots=True)
class PanelConfig:
    """Holds the panel host, API key and HTTP behaviour."""

    host: str
    api_key: str
    resilience: ResilienceConfig

    def __repr__(self) -> str:
        return f"PanelConfig(host={self.host!r}, api_key='***')"


def application_base_url(host: str) -> str:
    return host.rstrip("/") + APPLICATION_API_PATH


def build_panel_resilience(host: str, api_key: str, *, max_retries: int = 0) -> ResilienceConfig:
    return ResilienceConfig(
        name="pterodactyl",
        base_url=application_base_url(host),
        timeout_seconds=PANEL_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=max_retries),
        ratelimit=PANEL_RATE_LIMIT,
        default_headers={
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        },
    )


def get_panel_config(
    *,
    host: str | None = None,
    api_key: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> PanelConfig:
    """Build the panel configuration.

    Explicit values take precedence over ``PTERODACTYL_HOST`` and
    ``PTERODACTYL_API_KEY``. Missing or blank values on both sides are reported
    together.
    """

    resolved_host = setting_from_env(host, HOST_ENV_VAR)
    resolved_key = setting_from_env(api_key, API_KEY_ENV_VAR)

    if resolved_host is None or resolved_key is None:
        missing: list[str] = []
        if resolved_host is None:
            missing.append(f"host (set the host value or {HOST_ENV_VAR})")
        if resolved_key is None:
            missing.append(f"api_key (set the api_key value or {API_KEY_ENV_VAR})")
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")

    if resilience is None:
        resilience = build_panel_resilience(
            resolved_host,
            resolved_key,
            max_retries=int_from_env(MAX_RETRIES_ENV_VAR, default=0),
        )
    return PanelConfig(host=resolved_host, api_key=resolved_key, resilience=resilience)
