"""Public interface for the Pterodactyl adapter."""

from __future__ import annotations

from .client import PanelAPIError, PanelClient
from .schema import (
    AllocationAttributes,
    LocationAttributes,
    NodeAttributes,
    PanelList,
    PanelObject,
    UserAttributes,
)

__all__ = [
    "AllocationAttributes",
    "LocationAttributes",
    "NodeAttributes",
    "PanelAPIError",
    "PanelClient",
    "PanelList",
    "PanelObject",
    "UserAttributes",
]
