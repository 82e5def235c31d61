"""Converge a parent's child collection onto a desired list.

The panel offers only single-item create and delete endpoints for child
entities, so reconciliation is a diff of two flat id sets:

1) delete every current child whose id no desired entry carries
2) create every desired entry that has no id yet
3) list the children again and return that listing as the final state

Children are never updated in place. Changing a non-identifying attribute of an
existing child (an allocation alias, say) is not detected; drop its id from the
desired list to have it deleted and re-created.

The first failing create/delete aborts the run with ``PartialReconcileError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .errors import BackendError, PartialReconcileError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import CreateChild, DeleteChild, ListChildren

log = getLogger(__name__)


class ChildEntity(Protocol):
    @property
    def id(self) -> int | None: ...


@dataclass(slots=True, frozen=True)
class ReconcilePlan[C: ChildEntity]:
    """Ids to delete and entries to create, in execution order."""

    to_delete: tuple[int, ...] = ()
    to_create: tuple[C, ...] = ()

    @property
    def is_noop(self) -> bool:
        return not self.to_delete and not self.to_create


def plan_reconciliation[C: ChildEntity](
    desired: Sequence[C],
    current: Sequence[C],
) -> ReconcilePlan[C]:
    keep = {child.id for child in desired if child.id is not None}
    to_delete: list[int] = []
    for child in current:
        if child.id is None or child.id in keep or child.id in to_delete:
            continue
        to_delete.append(child.id)
    to_create = tuple(child for child in desired if child.id is None)
    return ReconcilePlan(to_delete=tuple(to_delete), to_create=to_create)


def reconcile[C: ChildEntity](
    parent_id: int,
    desired: Sequence[C],
    current: Sequence[C],
    *,
    create_child: CreateChild[C],
    delete_child: DeleteChild,
    list_children: ListChildren[C],
) -> list[C]:
    """Apply the minimal deletes/creates and return a fresh listing of children.

    ``current`` must be the persisted list read right before this call.
    """

    plan = plan_reconciliation(desired, current)
    log.info(
        "Reconciling children of %s: delete=%s, create=%s",
        parent_id,
        list(plan.to_delete),
        len(plan.to_create),
    )

    deleted: list[int] = []
    created: list[C] = []
    try:
        for child_id in plan.to_delete:
            delete_child(parent_id, child_id)
            deleted.append(child_id)
        for child in plan.to_create:
            create_child(parent_id, child)
            created.append(child)
    except BackendError as exc:
        log.error(
            "Reconciliation of %s aborted after %s deletions and %s creations: %s",
            parent_id,
            len(deleted),
            len(created),
            exc,
        )
        raise PartialReconcileError(
            str(exc),
            deleted=tuple(deleted),
            created=tuple(created),
        ) from exc

    return list_children(parent_id)
