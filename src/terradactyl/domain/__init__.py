"""Panel records plus the generic lookup and reconciliation helpers."""

from __future__ import annotations

from .errors import BackendError, MissingAttributeError, PartialReconcileError, RecordNotFoundError
from .lookup import (
    LOCATION_LOOKUP,
    NODE_LOOKUP,
    USER_LOOKUP,
    LookupKey,
    LookupSpec,
    resolve,
    resolve_one,
)
from .model import Allocation, Location, LocationDraft, Node, NodeDraft, User, UserDraft
from .reconcile import ReconcilePlan, plan_reconciliation, reconcile

__all__ = [
    "LOCATION_LOOKUP",
    "NODE_LOOKUP",
    "USER_LOOKUP",
    "Allocation",
    "BackendError",
    "Location",
    "LocationDraft",
    "LookupKey",
    "LookupSpec",
    "MissingAttributeError",
    "Node",
    "NodeDraft",
    "PartialReconcileError",
    "ReconcilePlan",
    "RecordNotFoundError",
    "User",
    "UserDraft",
    "plan_reconciliation",
    "reconcile",
    "resolve",
    "resolve_one",
]
