"""Flat state models exchanged with the lifecycle handlers.

Every value is either a plain scalar or ``None`` (unknown / not set), and
timestamps are RFC 3339 strings, so states serialise straight to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from terradactyl.domain.model import Allocation, Location, Node, User


def format_timestamp(value: datetime | None) -> str | None:
    """Render ``value`` as RFC 3339 with second precision and a ``Z`` for UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    rendered = value.replace(microsecond=0).isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[: -len("+00:00")] + "Z"
    return rendered


# resources


@dataclass(slots=True, kw_only=True)
class UserResourceState:
    username: str
    email: str
    first_name: str
    last_name: str
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(slots=True, kw_only=True)
class LocationResourceState:
    short: str
    long: str | None = None
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(slots=True, kw_only=True)
class AllocationState:
    ip: str
    port: int
    alias: str | None = None
    id: int | None = None
    notes: str | None = None
    assigned: bool | None = None


@dataclass(slots=True, kw_only=True)
class NodeResourceState:
    """Node resource attributes.

    ``allocations`` set to ``None`` leaves the node's allocations unmanaged; a list
    (even an empty one) is reconciled on create and update.
    """

    name: str
    location_id: int
    fqdn: str
    scheme: str
    memory: int
    memory_overallocate: int
    disk: int
    disk_overallocate: int
    upload_size: int
    daemon_sftp: int
    daemon_listen: int
    public: bool = True
    behind_proxy: bool = False
    maintenance_mode: bool = False
    description: str | None = None
    allocations: list[AllocationState] | None = None
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


# data sources


@dataclass(slots=True, kw_only=True)
class UserModel:
    id: int | None = None
    external_id: str | None = None
    uuid: str | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    language: str | None = None
    root_admin: bool | None = None
    is_2fa: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(slots=True, kw_only=True)
class UsersModel:
    users: list[UserModel] = field(default_factory=list["UserModel"])


@dataclass(slots=True, kw_only=True)
class LocationModel:
    id: int | None = None
    short: str | None = None
    long: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(slots=True, kw_only=True)
class LocationsModel:
    locations: list[LocationModel] = field(default_factory=list["LocationModel"])


@dataclass(slots=True, kw_only=True)
class NodeModel:
    id: int | None = None
    uuid: str | None = None
    public: bool | None = None
    name: str | None = None
    description: str | None = None
    location_id: int | None = None
    fqdn: str | None = None
    scheme: str | None = None
    behind_proxy: bool | None = None
    maintenance_mode: bool | None = None
    memory: int | None = None
    memory_overallocate: int | None = None
    disk: int | None = None
    disk_overallocate: int | None = None
    upload_size: int | None = None
    daemon_listen: int | None = None
    daemon_sftp: int | None = None
    daemon_base: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(slots=True, kw_only=True)
class NodesModel:
    nodes: list[NodeModel] = field(default_factory=list["NodeModel"])


@dataclass(slots=True, kw_only=True)
class NodesLocationModel:
    location_id: int
    nodes: list[NodeModel] = field(default_factory=list["NodeModel"])


@dataclass(slots=True, kw_only=True)
class NodeAllocationsModel:
    node_id: int
    allocations: list[AllocationState] = field(default_factory=list["AllocationState"])


# record -> state


def user_model(user: User) -> UserModel:
    return UserModel(
        id=user.id,
        external_id=user.external_id,
        uuid=user.uuid,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        language=user.language,
        root_admin=user.root_admin,
        is_2fa=user.is_2fa,
        created_at=format_timestamp(user.created_at),
        updated_at=format_timestamp(user.updated_at),
    )


def location_model(location: Location) -> LocationModel:
    return LocationModel(
        id=location.id,
        short=location.short,
        long=location.long,
        created_at=format_timestamp(location.created_at),
        updated_at=format_timestamp(location.updated_at),
    )


def node_model(node: Node) -> NodeModel:
    return NodeModel(
        id=node.id,
        uuid=node.uuid,
        public=node.public,
        name=node.name,
        description=node.description,
        location_id=node.location_id,
        fqdn=node.fqdn,
        scheme=node.scheme,
        behind_proxy=node.behind_proxy,
        maintenance_mode=node.maintenance_mode,
        memory=node.memory,
        memory_overallocate=node.memory_overallocate,
        disk=node.disk,
        disk_overallocate=node.disk_overallocate,
        upload_size=node.upload_size,
        daemon_listen=node.daemon_listen,
        daemon_sftp=node.daemon_sftp,
        daemon_base=node.daemon_base,
        created_at=format_timestamp(node.created_at),
        updated_at=format_timestamp(node.updated_at),
    )


def allocation_state(allocation: Allocation) -> AllocationState:
    return AllocationState(
        id=allocation.id,
        ip=allocation.ip,
        port=allocation.port,
        alias=allocation.alias,
        notes=allocation.notes,
        assigned=allocation.assigned,
    )


def allocation_from_state(state: AllocationState) -> Allocation:
    return Allocation(id=state.id, ip=state.ip, port=state.port, alias=state.alias)
