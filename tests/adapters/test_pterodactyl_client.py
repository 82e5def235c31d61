from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx
import pytest

from terradactyl.adapters.http_resilience import ResilienceConfig, ResilientClient
from terradactyl.adapters.pterodactyl import PanelAPIError, PanelClient
from terradactyl.config.panel import get_panel_config
from terradactyl.domain.model import Allocation, LocationDraft, NodeDraft

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from terradactyl.adapters.pterodactyl.client import ClientFactory

HOST = "https://panel.example.com"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> ClientFactory:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(
        resilience: ResilienceConfig,
        *,
        limiter: AsyncLimiter | None = None,
    ) -> ResilientClient:
        client = ResilientClient(resilience, limiter=limiter)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


def _panel_client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    page_size: int = 100,
) -> PanelClient:
    config = get_panel_config(host=HOST, api_key="ptla_secret")
    return PanelClient(
        config=config,
        client_factory=_make_client_factory(handler),
        page_size=page_size,
    )


def _node_attributes(node_id: int, **overrides: object) -> dict[str, object]:
    attributes: dict[str, object] = {
        "id": node_id,
        "uuid": f"node-uuid-{node_id}",
        "public": True,
        "name": f"node{node_id}",
        "description": "",
        "location_id": 1,
        "fqdn": f"node{node_id}.example.com",
        "scheme": "https",
        "behind_proxy": False,
        "maintenance_mode": False,
        "memory": 4096,
        "memory_overallocate": 0,
        "disk": 50000,
        "disk_overallocate": 0,
        "upload_size": 100,
        "daemon_listen": 8080,
        "daemon_sftp": 2022,
        "daemon_base": "/var/lib/pterodactyl/volumes",
        "created_at": "2024-03-01T12:30:15+00:00",
        "updated_at": "2024-03-02T08:00:00+00:00",
    }
    attributes.update(overrides)
    return attributes


def _list_envelope(
    items: list[dict[str, object]],
    *,
    object_name: str,
    page: int,
    total_pages: int,
) -> dict[str, object]:
    return {
        "object": "list",
        "data": [{"object": object_name, "attributes": item} for item in items],
        "meta": {
            "pagination": {
                "total": len(items) * total_pages,
                "count": len(items),
                "per_page": len(items),
                "current_page": page,
                "total_pages": total_pages,
                "links": {},
            }
        },
    }


def test_list_nodes_walks_every_page() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        page = int(request.url.params["page"])
        payload = _list_envelope(
            [_node_attributes(page * 10), _node_attributes(page * 10 + 1)],
            object_name="node",
            page=page,
            total_pages=2,
        )
        return httpx.Response(200, json=payload)

    nodes = _panel_client(handler, page_size=2).list_nodes()

    assert [node.id for node in nodes] == [10, 11, 20, 21]
    assert [request.url.params["page"] for request in requests] == ["1", "2"]
    assert all(request.url.params["per_page"] == "2" for request in requests)
    assert requests[0].url.path == "/api/application/nodes"
    assert nodes[0].created_at == datetime(2024, 3, 1, 12, 30, 15, tzinfo=UTC)


def test_list_without_meta_stops_after_first_page() -> None:
    calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={"object": "list", "data": []})

    assert _panel_client(handler).list_locations() == []
    assert calls == 1


def test_get_user_sends_bearer_token_and_parses_payload() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers["Authorization"]
        seen["path"] = request.url.path
        return httpx.Response(
            200,
            json={
                "object": "user",
                "attributes": {
                    "id": 4,
                    "external_id": "",
                    "uuid": "c4022c6c-9bf1-4a23-bff9-519cceb38335",
                    "username": "ada",
                    "email": "ada@example.com",
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "language": "en",
                    "root_admin": True,
                    "2fa": True,
                    "created_at": "2024-01-01T00:00:00+00:00",
                    "updated_at": "2024-01-01T00:00:00+00:00",
                },
            },
        )

    user = _panel_client(handler).get_user(4)

    assert seen == {"authorization": "Bearer ptla_secret", "path": "/api/application/users/4"}
    assert user.username == "ada"
    assert user.is_2fa is True
    assert user.root_admin is True
    assert user.external_id is None


def test_create_location_posts_payload() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        body = json.loads(request.content)
        bodies.append(body)
        return httpx.Response(
            201,
            json={"object": "location", "attributes": {"id": 9, **body}},
        )

    location = _panel_client(handler).create_location(LocationDraft(short="fra", long="Frankfurt"))

    assert bodies == [{"short": "fra", "long": "Frankfurt"}]
    assert location.id == 9
    assert location.long == "Frankfurt"


def test_update_node_patches_with_empty_description() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PATCH"
        assert request.url.path == "/api/application/nodes/5"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"object": "node", "attributes": _node_attributes(5)})

    draft = NodeDraft(
        name="node5",
        location_id=1,
        fqdn="node5.example.com",
        scheme="https",
        memory=4096,
        memory_overallocate=0,
        disk=50000,
        disk_overallocate=0,
        upload_size=100,
        daemon_listen=8080,
        daemon_sftp=2022,
    )
    node = _panel_client(handler).update_node(5, draft)

    assert bodies[0]["description"] == ""
    assert bodies[0]["daemon_sftp"] == 2022
    assert node.daemon_base == "/var/lib/pterodactyl/volumes"


def test_create_allocation_accepts_no_content() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/application/nodes/3/allocations"
        bodies.append(json.loads(request.content))
        return httpx.Response(204)

    client = _panel_client(handler)
    client.create_allocation(3, Allocation(ip="10.0.0.1", port=25565, alias="mc"))

    assert bodies == [{"ip": "10.0.0.1", "ports": ["25565"], "alias": "mc"}]


def test_delete_allocation_uses_allocation_path() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(204)

    _panel_client(handler).delete_allocation(3, 12)

    assert seen == [("DELETE", "/api/application/nodes/3/allocations/12")]


def test_list_allocations_normalises_blank_alias() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        payload = _list_envelope(
            [
                {
                    "id": 1,
                    "ip": "10.0.0.1",
                    "alias": "",
                    "port": 25565,
                    "notes": None,
                    "assigned": True,
                }
            ],
            object_name="allocation",
            page=1,
            total_pages=1,
        )
        return httpx.Response(200, json=payload)

    allocations = _panel_client(handler).list_allocations(3)

    assert allocations == [
        Allocation(id=1, ip="10.0.0.1", port=25565, alias=None, notes=None, assigned=True)
    ]


def test_error_envelope_detail_is_passed_through() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "errors": [
                    {
                        "code": "NotFoundHttpException",
                        "status": "404",
                        "detail": "The requested resource could not be found on the server.",
                    }
                ]
            },
        )

    with pytest.raises(PanelAPIError) as excinfo:
        _panel_client(handler).get_node(99)

    assert str(excinfo.value) == "The requested resource could not be found on the server."
    assert excinfo.value.status_code == 404


def test_error_without_envelope_falls_back_to_body() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    with pytest.raises(PanelAPIError, match="HTTP 500: upstream exploded"):
        _panel_client(handler).delete_user(1)


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PanelAPIError, match="connection refused") as excinfo:
        _panel_client(handler).list_users()

    assert excinfo.value.status_code is None


def test_unexpected_payload_is_reported() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"object": "node", "attributes": {"id": "nope"}})

    with pytest.raises(PanelAPIError, match="Unexpected panel response payload"):
        _panel_client(handler).get_node(1)


def test_calls_share_one_rate_limiter() -> None:
    limiters: list[AsyncLimiter | None] = []
    inner = _make_client_factory(lambda _request: httpx.Response(204))

    def factory(
        resilience: ResilienceConfig,
        *,
        limiter: AsyncLimiter | None = None,
    ) -> ResilientClient:
        limiters.append(limiter)
        return inner(resilience, limiter=limiter)

    client = PanelClient(
        config=get_panel_config(host=HOST, api_key="ptla_secret"),
        client_factory=factory,
    )
    client.delete_allocation(3, 1)
    client.delete_allocation(3, 2)
    client.create_allocation(3, Allocation(ip="10.0.0.1", port=25565))

    assert len(limiters) == 3
    assert limiters[0] is not None
    assert limiters[0].max_rate == 240
    assert all(limiter is limiters[0] for limiter in limiters)
