"""Panel records and the drafts used to create or update them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, frozen=True, kw_only=True)
class User:
    id: int
    uuid: str
    username: str
    email: str
    first_name: str
    last_name: str
    external_id: str | None = None
    language: str = "en"
    root_admin: bool = False
    is_2fa: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class UserDraft:
    username: str
    email: str
    first_name: str
    last_name: str
    external_id: str | None = None
    password: str | None = None
    language: str | None = None
    root_admin: bool | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class Location:
    id: int
    short: str
    long: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class LocationDraft:
    short: str
    long: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class Node:
    id: int
    uuid: str
    name: str
    location_id: int
    fqdn: str
    scheme: str
    memory: int
    memory_overallocate: int
    disk: int
    disk_overallocate: int
    upload_size: int
    daemon_listen: int
    daemon_sftp: int
    description: str | None = None
    public: bool = True
    behind_proxy: bool = False
    maintenance_mode: bool = False
    daemon_base: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class NodeDraft:
    name: str
    location_id: int
    fqdn: str
    scheme: str
    memory: int
    memory_overallocate: int
    disk: int
    disk_overallocate: int
    upload_size: int
    daemon_listen: int
    daemon_sftp: int
    description: str | None = None
    public: bool = True
    behind_proxy: bool = False
    maintenance_mode: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class Allocation:
    """A port allocation owned by a node.

    ``id`` is ``None`` until the panel has persisted the allocation; such entries
    are always created, never matched against existing ones.
    """

    ip: str
    port: int
    id: int | None = None
    alias: str | None = None
    notes: str | None = None
    assigned: bool = False
