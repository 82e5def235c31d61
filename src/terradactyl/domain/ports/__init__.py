"""Domain port definitions for adapters."""

from __future__ import annotations

from .panel import (
    CreateChild,
    DeleteChild,
    FetchAll,
    FetchById,
    ListChildren,
    PanelGateway,
)

__all__ = [
    "CreateChild",
    "DeleteChild",
    "FetchAll",
    "FetchById",
    "ListChildren",
    "PanelGateway",
]
