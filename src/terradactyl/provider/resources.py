"""Managed resources: create, read, update, delete and import.

Each handler maps a flat state onto a draft, calls the panel, and copies the
panel's answer back into a fresh state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from terradactyl.domain.model import LocationDraft, NodeDraft, UserDraft
from terradactyl.domain.reconcile import reconcile

from .diagnostics import ProviderError, diagnostics, parse_import_id
from .state import (
    AllocationState,
    LocationResourceState,
    NodeResourceState,
    UserResourceState,
    allocation_from_state,
    allocation_state,
    format_timestamp,
)

if TYPE_CHECKING:
    from terradactyl.domain.model import Allocation, Location, Node, User
    from terradactyl.domain.ports import PanelGateway

log = getLogger(__name__)


class PanelResource[S](ABC):
    """Lifecycle handler for one panel resource type."""

    type_name: ClassVar[str]
    state_type: ClassVar[type]

    def __init__(self, client: PanelGateway) -> None:
        self._client = client

    @abstractmethod
    def create(self, plan: S) -> S: ...

    @abstractmethod
    def read(self, state: S) -> S: ...

    @abstractmethod
    def update(self, plan: S) -> S: ...

    @abstractmethod
    def delete(self, state: S) -> None: ...

    @abstractmethod
    def import_state(self, import_id: str) -> S: ...

    def _require_id(self, state: S) -> int:
        resource_id = getattr(state, "id", None)
        if resource_id is None:
            raise ProviderError(
                "Missing Resource ID",
                f"The {self.type_name} state has no id; create or import it first.",
            )
        return int(resource_id)


class UserResource(PanelResource[UserResourceState]):
    type_name = "user"
    state_type = UserResourceState

    def create(self, plan: UserResourceState) -> UserResourceState:
        log.info("Creating user %s", plan.username)
        with diagnostics("Error creating user", "Could not create user, unexpected error: "):
            user = self._client.create_user(_user_draft(plan))
        return _user_state(user)

    def read(self, state: UserResourceState) -> UserResourceState:
        user_id = self._require_id(state)
        with diagnostics(
            "Error Reading Pterodactyl User",
            f"Could not read Pterodactyl user ID {user_id}: ",
        ):
            user = self._client.get_user(user_id)
        return _user_state(user)

    def update(self, plan: UserResourceState) -> UserResourceState:
        user_id = self._require_id(plan)
        log.info("Updating user %s", user_id)
        with diagnostics(
            "Error Updating Pterodactyl User",
            "Could not update user, unexpected error: ",
        ):
            user = self._client.update_user(user_id, _user_draft(plan))
        return _user_state(user)

    def delete(self, state: UserResourceState) -> None:
        user_id = self._require_id(state)
        log.info("Deleting user %s", user_id)
        with diagnostics(
            "Error Deleting Pterodactyl User",
            "Could not delete user, unexpected error: ",
        ):
            self._client.delete_user(user_id)

    def import_state(self, import_id: str) -> UserResourceState:
        user_id = parse_import_id(import_id)
        with diagnostics("Error Importing Pterodactyl User", "Could not import user: "):
            user = self._client.get_user(user_id)
        return _user_state(user)


class LocationResource(PanelResource[LocationResourceState]):
    type_name = "location"
    state_type = LocationResourceState

    def create(self, plan: LocationResourceState) -> LocationResourceState:
        log.info("Creating location %s", plan.short)
        with diagnostics(
            "Error creating location",
            "Could not create location, unexpected error: ",
        ):
            location = self._client.create_location(_location_draft(plan))
        return _location_state(location)

    def read(self, state: LocationResourceState) -> LocationResourceState:
        location_id = self._require_id(state)
        with diagnostics(
            "Error Reading Pterodactyl Location",
            f"Could not read Pterodactyl location ID {location_id}: ",
        ):
            location = self._client.get_location(location_id)
        return _location_state(location)

    def update(self, plan: LocationResourceState) -> LocationResourceState:
        location_id = self._require_id(plan)
        log.info("Updating location %s", location_id)
        with diagnostics(
            "Error Updating Pterodactyl Location",
            "Could not update location, unexpected error: ",
        ):
            location = self._client.update_location(location_id, _location_draft(plan))
        return _location_state(location)

    def delete(self, state: LocationResourceState) -> None:
        location_id = self._require_id(state)
        log.info("Deleting location %s", location_id)
        with diagnostics(
            "Error Deleting Pterodactyl Location",
            "Could not delete location, unexpected error: ",
        ):
            self._client.delete_location(location_id)

    def import_state(self, import_id: str) -> LocationResourceState:
        location_id = parse_import_id(import_id)
        with diagnostics("Error Importing Pterodactyl Location", "Could not import location: "):
            location = self._client.get_location(location_id)
        return _location_state(location)


class NodeResource(PanelResource[NodeResourceState]):
    type_name = "node"
    state_type = NodeResourceState

    def create(self, plan: NodeResourceState) -> NodeResourceState:
        log.info("Creating node %s", plan.name)
        draft = _node_draft(plan)
        with diagnostics("Error creating node", "Could not create node, unexpected error: "):
            node = self._client.create_node(draft)

        try:
            # the panel may drop the description on create; patch it in afterwards
            if plan.description is not None and node.description != plan.description:
                with diagnostics(
                    "Error Updating Pterodactyl Node",
                    "Could not update node, unexpected error: ",
                ):
                    node = self._client.update_node(node.id, draft)
            allocations = self._sync_allocations(node.id, plan.allocations)
        except ProviderError as exc:
            log.error("Node %s was created but not fully configured", node.id)  # noqa: TRY400
            exc.state = replace(_node_state(node, []), allocations=None)
            raise
        return _node_state(node, allocations)

    def read(self, state: NodeResourceState) -> NodeResourceState:
        node_id = self._require_id(state)
        with diagnostics(
            "Error Reading Pterodactyl Node",
            f"Could not read Pterodactyl node ID {node_id}: ",
        ):
            node = self._client.get_node(node_id)
            allocations = self._client.list_allocations(node_id)
        return _node_state(node, allocations)

    def update(self, plan: NodeResourceState) -> NodeResourceState:
        node_id = self._require_id(plan)
        log.info("Updating node %s", node_id)
        with diagnostics(
            "Error Updating Pterodactyl Node",
            "Could not update node, unexpected error: ",
        ):
            node = self._client.update_node(node_id, _node_draft(plan))
        allocations = self._sync_allocations(node_id, plan.allocations)
        return _node_state(node, allocations)

    def delete(self, state: NodeResourceState) -> None:
        node_id = self._require_id(state)
        log.info("Deleting node %s", node_id)
        with diagnostics(
            "Error Deleting Pterodactyl Node",
            "Could not delete node, unexpected error: ",
        ):
            self._client.delete_node(node_id)

    def import_state(self, import_id: str) -> NodeResourceState:
        node_id = parse_import_id(import_id)
        with diagnostics("Error Importing Pterodactyl Node", "Could not import node: "):
            node = self._client.get_node(node_id)
            allocations = self._client.list_allocations(node_id)
        return _node_state(node, allocations)

    def _sync_allocations(
        self,
        node_id: int,
        desired: list[AllocationState] | None,
    ) -> list[Allocation]:
        with diagnostics(
            "Error Updating Pterodactyl Node Allocations",
            f"Could not reconcile allocations of node {node_id}: ",
        ):
            current = self._client.list_allocations(node_id)
            if desired is None:
                return current
            return reconcile(
                node_id,
                [allocation_from_state(entry) for entry in desired],
                current,
                create_child=self._client.create_allocation,
                delete_child=self._client.delete_allocation,
                list_children=self._client.list_allocations,
            )


def _user_draft(plan: UserResourceState) -> UserDraft:
    return UserDraft(
        username=plan.username,
        email=plan.email,
        first_name=plan.first_name,
        last_name=plan.last_name,
    )


def _user_state(user: User) -> UserResourceState:
    return UserResourceState(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        created_at=format_timestamp(user.created_at),
        updated_at=format_timestamp(user.updated_at),
    )


def _location_draft(plan: LocationResourceState) -> LocationDraft:
    return LocationDraft(short=plan.short, long=plan.long)


def _location_state(location: Location) -> LocationResourceState:
    return LocationResourceState(
        id=location.id,
        short=location.short,
        long=location.long,
        created_at=format_timestamp(location.created_at),
        updated_at=format_timestamp(location.updated_at),
    )


def _node_draft(plan: NodeResourceState) -> NodeDraft:
    return NodeDraft(
        name=plan.name,
        description=plan.description,
        public=plan.public,
        behind_proxy=plan.behind_proxy,
        maintenance_mode=plan.maintenance_mode,
        location_id=plan.location_id,
        fqdn=plan.fqdn,
        scheme=plan.scheme,
        memory=plan.memory,
        memory_overallocate=plan.memory_overallocate,
        disk=plan.disk,
        disk_overallocate=plan.disk_overallocate,
        upload_size=plan.upload_size,
        daemon_listen=plan.daemon_listen,
        daemon_sftp=plan.daemon_sftp,
    )


def _node_state(node: Node, allocations: list[Allocation]) -> NodeResourceState:
    return NodeResourceState(
        id=node.id,
        name=node.name,
        description=node.description,
        public=node.public,
        behind_proxy=node.behind_proxy,
        maintenance_mode=node.maintenance_mode,
        location_id=node.location_id,
        fqdn=node.fqdn,
        scheme=node.scheme,
        memory=node.memory,
        memory_overallocate=node.memory_overallocate,
        disk=node.disk,
        disk_overallocate=node.disk_overallocate,
        upload_size=node.upload_size,
        daemon_sftp=node.daemon_sftp,
        daemon_listen=node.daemon_listen,
        allocations=[allocation_state(allocation) for allocation in allocations],
        created_at=format_timestamp(node.created_at),
        updated_at=format_timestamp(node.updated_at),
    )
