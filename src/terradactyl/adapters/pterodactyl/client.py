"""HTTP client for the Pterodactyl application API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx
from pydantic import ValidationError

from terradactyl.adapters.http_resilience import ResilientClient, build_limiter
from terradactyl.domain.errors import BackendError

from .schema import (
    AllocationAttributes,
    ErrorResponse,
    LocationAttributes,
    NodeAttributes,
    PanelBaseModel,
    PanelList,
    PanelObject,
    UserAttributes,
)
from .translator import (
    allocation_payload,
    location_payload,
    node_payload,
    parse_allocation,
    parse_location,
    parse_node,
    parse_user,
    user_payload,
)

if TYPE_CHECKING:
    from aiolimiter import AsyncLimiter

    from terradactyl.config.http_resilience import ResilienceConfig
    from terradactyl.config.panel import PanelConfig
    from terradactyl.domain.model import (
        Allocation,
        Location,
        LocationDraft,
        Node,
        NodeDraft,
        User,
        UserDraft,
    )

log = getLogger(__name__)


class ClientFactory(Protocol):
    def __call__(
        self,
        config: ResilienceConfig,
        *,
        limiter: AsyncLimiter | None = None,
    ) -> ResilientClient: ...


DEFAULT_PAGE_SIZE = 100


class PanelAPIError(BackendError):
    """Raised when the panel rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PanelClient:
    """Synchronous facade over the async panel API.

    Each public method runs one request chain to completion. Listings walk every
    page so callers always see the complete collection. One rate limiter spans
    all calls made through the same client.
    """

    def __init__(
        self,
        *,
        config: PanelConfig,
        client_factory: ClientFactory | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._page_size = page_size
        self._limiter = build_limiter(self._resilience.ratelimit)

    @property
    def host(self) -> str:
        return self._config.host

    # users

    def list_users(self) -> list[User]:
        return [parse_user(item) for item in self._list("users", UserAttributes)]

    def get_user(self, user_id: int) -> User:
        return parse_user(self._object("GET", f"users/{user_id}", UserAttributes))

    def create_user(self, draft: UserDraft) -> User:
        payload = user_payload(draft)
        return parse_user(self._object("POST", "users", UserAttributes, json=payload))

    def update_user(self, user_id: int, draft: UserDraft) -> User:
        payload = user_payload(draft)
        return parse_user(self._object("PATCH", f"users/{user_id}", UserAttributes, json=payload))

    def delete_user(self, user_id: int) -> None:
        self._command("DELETE", f"users/{user_id}")

    # locations

    def list_locations(self) -> list[Location]:
        return [parse_location(item) for item in self._list("locations", LocationAttributes)]

    def get_location(self, location_id: int) -> Location:
        return parse_location(self._object("GET", f"locations/{location_id}", LocationAttributes))

    def create_location(self, draft: LocationDraft) -> Location:
        payload = location_payload(draft)
        return parse_location(self._object("POST", "locations", LocationAttributes, json=payload))

    def update_location(self, location_id: int, draft: LocationDraft) -> Location:
        payload = location_payload(draft)
        return parse_location(
            self._object("PATCH", f"locations/{location_id}", LocationAttributes, json=payload)
        )

    def delete_location(self, location_id: int) -> None:
        self._command("DELETE", f"locations/{location_id}")

    # nodes

    def list_nodes(self) -> list[Node]:
        return [parse_node(item) for item in self._list("nodes", NodeAttributes)]

    def get_node(self, node_id: int) -> Node:
        return parse_node(self._object("GET", f"nodes/{node_id}", NodeAttributes))

    def create_node(self, draft: NodeDraft) -> Node:
        payload = node_payload(draft)
        return parse_node(self._object("POST", "nodes", NodeAttributes, json=payload))

    def update_node(self, node_id: int, draft: NodeDraft) -> Node:
        payload = node_payload(draft)
        return parse_node(self._object("PATCH", f"nodes/{node_id}", NodeAttributes, json=payload))

    def delete_node(self, node_id: int) -> None:
        self._command("DELETE", f"nodes/{node_id}")

    # allocations

    def list_allocations(self, node_id: int) -> list[Allocation]:
        return [
            parse_allocation(item)
            for item in self._list(f"nodes/{node_id}/allocations", AllocationAttributes)
        ]

    def create_allocation(self, node_id: int, allocation: Allocation) -> None:
        self._command(
            "POST",
            f"nodes/{node_id}/allocations",
            json=allocation_payload(allocation),
        )

    def delete_allocation(self, node_id: int, allocation_id: int) -> None:
        self._command("DELETE", f"nodes/{node_id}/allocations/{allocation_id}")

    # plumbing

    def _list[A: PanelBaseModel](self, path: str, attributes_type: type[A]) -> list[A]:
        return asyncio.run(self._list_async(path, attributes_type))

    def _object[A: PanelBaseModel](
        self,
        method: str,
        path: str,
        attributes_type: type[A],
        *,
        json: dict[str, object] | None = None,
    ) -> A:
        return asyncio.run(self._object_async(method, path, attributes_type, json=json))

    def _command(self, method: str, path: str, *, json: dict[str, object] | None = None) -> None:
        asyncio.run(self._command_async(method, path, json=json))

    async def _list_async[A: PanelBaseModel](
        self,
        path: str,
        attributes_type: type[A],
    ) -> list[A]:
        items: list[A] = []
        page = 1
        async with self._client_factory(self._resilience, limiter=self._limiter) as client:
            while True:
                payload = await self._perform_request(
                    client=client,
                    method="GET",
                    path=path,
                    params={"page": page, "per_page": self._page_size},
                )
                listing = _validate(PanelList[attributes_type], payload)
                items.extend(item.attributes for item in listing.data)
                if page >= listing.total_pages:
                    break
                page += 1
        return items

    async def _object_async[A: PanelBaseModel](
        self,
        method: str,
        path: str,
        attributes_type: type[A],
        *,
        json: dict[str, object] | None,
    ) -> A:
        async with self._client_factory(self._resilience, limiter=self._limiter) as client:
            payload = await self._perform_request(
                client=client,
                method=method,
                path=path,
                json=json,
            )
        return _validate(PanelObject[attributes_type], payload).attributes

    async def _command_async(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, object] | None,
    ) -> None:
        async with self._client_factory(self._resilience, limiter=self._limiter) as client:
            await self._perform_request(client=client, method=method, path=path, json=json)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        method: str,
        path: str,
        params: dict[str, int] | None = None,
        json: dict[str, object] | None = None,
    ) -> object:
        log.debug("Panel request %s %s params=%s", method, path, params)
        try:
            response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise PanelAPIError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            error = _error_from_response(response)
            log.error(f"Panel API error {response.status_code} for {method} {path}: {error}")
            raise error

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PanelAPIError(
                f"Unexpected non-JSON response for {method} {path}",
                status_code=response.status_code,
            ) from exc


def _validate[M: PanelBaseModel](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise PanelAPIError(f"Unexpected panel response payload: {exc}") from exc


def _error_from_response(response: httpx.Response) -> PanelAPIError:
    try:
        details = [error.detail for error in ErrorResponse.model_validate(response.json()).errors]
    except (ValueError, ValidationError):
        details = []
    message = "; ".join(details) if details else f"HTTP {response.status_code}: {response.text}"
    return PanelAPIError(message, status_code=response.status_code)
