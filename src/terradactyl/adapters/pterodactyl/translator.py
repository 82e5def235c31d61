"""Translate panel payloads into domain records and drafts into request bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from terradactyl.domain.model import Allocation, Location, Node, User

if TYPE_CHECKING:
    from terradactyl.domain.model import LocationDraft, NodeDraft, UserDraft

    from .schema import AllocationAttributes, LocationAttributes, NodeAttributes, UserAttributes


def parse_user(attributes: UserAttributes) -> User:
    return User(
        id=attributes.id,
        uuid=attributes.uuid,
        username=attributes.username,
        email=attributes.email,
        first_name=attributes.first_name,
        last_name=attributes.last_name,
        external_id=attributes.external_id,
        language=attributes.language,
        root_admin=attributes.root_admin,
        is_2fa=attributes.is_2fa,
        created_at=attributes.created_at,
        updated_at=attributes.updated_at,
    )


def parse_location(attributes: LocationAttributes) -> Location:
    return Location(
        id=attributes.id,
        short=attributes.short,
        long=attributes.long,
        created_at=attributes.created_at,
        updated_at=attributes.updated_at,
    )


def parse_node(attributes: NodeAttributes) -> Node:
    return Node(
        id=attributes.id,
        uuid=attributes.uuid,
        name=attributes.name,
        description=attributes.description,
        public=attributes.public,
        behind_proxy=attributes.behind_proxy,
        maintenance_mode=attributes.maintenance_mode,
        location_id=attributes.location_id,
        fqdn=attributes.fqdn,
        scheme=attributes.scheme,
        memory=attributes.memory,
        memory_overallocate=attributes.memory_overallocate,
        disk=attributes.disk,
        disk_overallocate=attributes.disk_overallocate,
        upload_size=attributes.upload_size,
        daemon_listen=attributes.daemon_listen,
        daemon_sftp=attributes.daemon_sftp,
        daemon_base=attributes.daemon_base,
        created_at=attributes.created_at,
        updated_at=attributes.updated_at,
    )


def parse_allocation(attributes: AllocationAttributes) -> Allocation:
    return Allocation(
        id=attributes.id,
        ip=attributes.ip,
        port=attributes.port,
        alias=attributes.alias,
        notes=attributes.notes,
        assigned=attributes.assigned,
    )


def user_payload(draft: UserDraft) -> dict[str, object]:
    payload: dict[str, object] = {
        "username": draft.username,
        "email": draft.email,
        "first_name": draft.first_name,
        "last_name": draft.last_name,
    }
    optional = {
        "external_id": draft.external_id,
        "password": draft.password,
        "language": draft.language,
        "root_admin": draft.root_admin,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    return payload


def location_payload(draft: LocationDraft) -> dict[str, object]:
    payload: dict[str, object] = {"short": draft.short}
    if draft.long is not None:
        payload["long"] = draft.long
    return payload


def node_payload(draft: NodeDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "description": draft.description or "",
        "location_id": draft.location_id,
        "public": draft.public,
        "fqdn": draft.fqdn,
        "scheme": draft.scheme,
        "behind_proxy": draft.behind_proxy,
        "maintenance_mode": draft.maintenance_mode,
        "memory": draft.memory,
        "memory_overallocate": draft.memory_overallocate,
        "disk": draft.disk,
        "disk_overallocate": draft.disk_overallocate,
        "upload_size": draft.upload_size,
        "daemon_listen": draft.daemon_listen,
        "daemon_sftp": draft.daemon_sftp,
    }


def allocation_payload(allocation: Allocation) -> dict[str, object]:
    # the endpoint takes a list of ports (or ranges) and answers with no body
    payload: dict[str, object] = {"ip": allocation.ip, "ports": [str(allocation.port)]}
    if allocation.alias is not None:
        payload["alias"] = allocation.alias
    return payload
