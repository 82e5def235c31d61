"""Pydantic models describing the Pterodactyl application API payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class PanelBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserAttributes(PanelBaseModel):
    id: int
    external_id: str | None = None
    uuid: str
    username: str
    email: str
    first_name: str
    last_name: str
    language: str = "en"
    root_admin: bool = False
    is_2fa: bool = Field(default=False, alias="2fa")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    _normalize_external_id = field_validator("external_id", mode="before")(_blank_to_none)


class LocationAttributes(PanelBaseModel):
    id: int
    short: str
    long: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NodeAttributes(PanelBaseModel):
    id: int
    uuid: str
    public: bool = True
    name: str
    description: str | None = None
    location_id: int
    fqdn: str
    scheme: str
    behind_proxy: bool = False
    maintenance_mode: bool = False
    memory: int
    memory_overallocate: int = 0
    disk: int
    disk_overallocate: int = 0
    upload_size: int = 100
    daemon_listen: int
    daemon_sftp: int
    daemon_base: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AllocationAttributes(PanelBaseModel):
    id: int
    ip: str
    alias: str | None = None
    port: int
    notes: str | None = None
    assigned: bool = False

    _normalize_alias = field_validator("alias", "notes", mode="before")(_blank_to_none)


AttributesT = TypeVar("AttributesT", bound=PanelBaseModel)


class PanelObject(PanelBaseModel, Generic[AttributesT]):
    object: str
    attributes: AttributesT


class Pagination(PanelBaseModel):
    total: int
    count: int
    per_page: int
    current_page: int
    total_pages: int


class ListMeta(PanelBaseModel):
    pagination: Pagination


class PanelList(PanelBaseModel, Generic[AttributesT]):
    object: str = "list"
    data: list[PanelObject[AttributesT]] = Field(default_factory=list)
    meta: ListMeta | None = None

    @property
    def total_pages(self) -> int:
        if self.meta is None:
            return 1
        return self.meta.pagination.total_pages


class ErrorDetail(PanelBaseModel):
    code: str | None = None
    status: str | None = None
    detail: str


class ErrorResponse(PanelBaseModel):
    errors: list[ErrorDetail] = Field(default_factory=list["ErrorDetail"])
