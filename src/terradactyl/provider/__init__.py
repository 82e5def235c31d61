"""Lifecycle handlers and data sources of the ``pterodactyl`` provider."""

from __future__ import annotations

from .data_sources import PanelDataSource
from .diagnostics import ProviderError, diagnostics, parse_import_id
from .provider import Provider, qualified_name
from .resources import LocationResource, NodeResource, PanelResource, UserResource

__all__ = [
    "LocationResource",
    "NodeResource",
    "PanelDataSource",
    "PanelResource",
    "Provider",
    "ProviderError",
    "UserResource",
    "diagnostics",
    "parse_import_id",
    "qualified_name",
]
