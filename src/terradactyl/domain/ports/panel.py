"""Ports for reading and mutating panel records."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from terradactyl.domain.model import (
        Allocation,
        Location,
        LocationDraft,
        Node,
        NodeDraft,
        User,
        UserDraft,
    )

type FetchById[R] = Callable[[int], R]
type FetchAll[R] = Callable[[], Iterable[R]]
type CreateChild[C] = Callable[[int, C], None]
type DeleteChild = Callable[[int, int], None]
type ListChildren[C] = Callable[[int], list[C]]


@runtime_checkable
class PanelGateway(Protocol):
    """Everything the lifecycle handlers need from the panel API."""

    def list_users(self) -> list[User]: ...
    def get_user(self, user_id: int) -> User: ...
    def create_user(self, draft: UserDraft) -> User: ...
    def update_user(self, user_id: int, draft: UserDraft) -> User: ...
    def delete_user(self, user_id: int) -> None: ...

    def list_locations(self) -> list[Location]: ...
    def get_location(self, location_id: int) -> Location: ...
    def create_location(self, draft: LocationDraft) -> Location: ...
    def update_location(self, location_id: int, draft: LocationDraft) -> Location: ...
    def delete_location(self, location_id: int) -> None: ...

    def list_nodes(self) -> list[Node]: ...
    def get_node(self, node_id: int) -> Node: ...
    def create_node(self, draft: NodeDraft) -> Node: ...
    def update_node(self, node_id: int, draft: NodeDraft) -> Node: ...
    def delete_node(self, node_id: int) -> None: ...

    def list_allocations(self, node_id: int) -> list[Allocation]: ...
    def create_allocation(self, node_id: int, allocation: Allocation) -> None: ...
    def delete_allocation(self, node_id: int, allocation_id: int) -> None: ...
