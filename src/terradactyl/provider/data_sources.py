"""Read-only data sources.

Singular sources accept exactly one identifying attribute and resolve it
through the lookup helpers; plural sources return the whole (filtered)
collection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from terradactyl.domain.errors import MissingAttributeError
from terradactyl.domain.lookup import (
    LOCATION_LOOKUP,
    NODE_LOOKUP,
    USER_LOOKUP,
    populated_keys,
    resolve_one,
)

from .diagnostics import ProviderError, diagnostics
from .state import (
    LocationModel,
    LocationsModel,
    NodeAllocationsModel,
    NodeModel,
    NodesLocationModel,
    NodesModel,
    UserModel,
    UsersModel,
    allocation_state,
    location_model,
    node_model,
    user_model,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from terradactyl.domain.lookup import LookupSpec
    from terradactyl.domain.ports import PanelGateway

log = getLogger(__name__)


class PanelDataSource[M](ABC):
    type_name: ClassVar[str]
    model_type: ClassVar[type]

    def __init__(self, client: PanelGateway) -> None:
        self._client = client

    @abstractmethod
    def read(self, config: M) -> M: ...


def _resolve_single[R](
    spec: LookupSpec[R],
    config: object,
    *,
    fetch_by_id: Callable[[int], R],
    fetch_all: Callable[[], Iterable[R]],
    summary: str,
) -> R:
    request = {name: getattr(config, name, None) for name in spec.key_names}
    supplied = populated_keys(spec, request)
    if len(supplied) > 1:
        names = ", ".join(f"'{name}'" for name in supplied)
        raise ProviderError(
            "Invalid Attribute Combination",
            f"Only one of {names} may be specified.",
        )
    try:
        with diagnostics(summary):
            return resolve_one(spec, request, fetch_by_id=fetch_by_id, fetch_all=fetch_all)
    except MissingAttributeError as exc:
        raise ProviderError("Missing Attribute", str(exc)) from exc


class UserDataSource(PanelDataSource[UserModel]):
    type_name = "user"
    model_type = UserModel

    def read(self, config: UserModel) -> UserModel:
        user = _resolve_single(
            USER_LOOKUP,
            config,
            fetch_by_id=self._client.get_user,
            fetch_all=self._client.list_users,
            summary="Unable to Read Pterodactyl User",
        )
        return user_model(user)


class UsersDataSource(PanelDataSource[UsersModel]):
    type_name = "users"
    model_type = UsersModel

    def read(self, config: UsersModel) -> UsersModel:
        with diagnostics("Unable to Read Pterodactyl Users"):
            users = self._client.list_users()
        return UsersModel(users=[user_model(user) for user in users])


class LocationDataSource(PanelDataSource[LocationModel]):
    type_name = "location"
    model_type = LocationModel

    def read(self, config: LocationModel) -> LocationModel:
        location = _resolve_single(
            LOCATION_LOOKUP,
            config,
            fetch_by_id=self._client.get_location,
            fetch_all=self._client.list_locations,
            summary="Unable to Read Pterodactyl Location",
        )
        return location_model(location)


class LocationsDataSource(PanelDataSource[LocationsModel]):
    type_name = "locations"
    model_type = LocationsModel

    def read(self, config: LocationsModel) -> LocationsModel:
        with diagnostics("Unable to Read Pterodactyl Locations"):
            locations = self._client.list_locations()
        return LocationsModel(locations=[location_model(location) for location in locations])


class NodeDataSource(PanelDataSource[NodeModel]):
    type_name = "node"
    model_type = NodeModel

    def read(self, config: NodeModel) -> NodeModel:
        node = _resolve_single(
            NODE_LOOKUP,
            config,
            fetch_by_id=self._client.get_node,
            fetch_all=self._client.list_nodes,
            summary="Unable to Read Pterodactyl Node",
        )
        return node_model(node)


class NodesDataSource(PanelDataSource[NodesModel]):
    type_name = "nodes"
    model_type = NodesModel

    def read(self, config: NodesModel) -> NodesModel:
        with diagnostics("Unable to Read Pterodactyl Nodes"):
            nodes = self._client.list_nodes()
        return NodesModel(nodes=[node_model(node) for node in nodes])


class NodesLocationDataSource(PanelDataSource[NodesLocationModel]):
    type_name = "nodes_location"
    model_type = NodesLocationModel

    def read(self, config: NodesLocationModel) -> NodesLocationModel:
        with diagnostics("Unable to Read Pterodactyl Nodes"):
            nodes = self._client.list_nodes()
        matching = [node_model(node) for node in nodes if node.location_id == config.location_id]
        log.debug("Location %s has %s node(s)", config.location_id, len(matching))
        return NodesLocationModel(location_id=config.location_id, nodes=matching)


class NodeAllocationsDataSource(PanelDataSource[NodeAllocationsModel]):
    type_name = "node_allocations"
    model_type = NodeAllocationsModel

    def read(self, config: NodeAllocationsModel) -> NodeAllocationsModel:
        with diagnostics(
            "Unable to Read Pterodactyl Node Allocations",
            f"Could not list allocations of node {config.node_id}: ",
        ):
            allocations = self._client.list_allocations(config.node_id)
        return NodeAllocationsModel(
            node_id=config.node_id,
            allocations=[allocation_state(allocation) for allocation in allocations],
        )
