from __future__ import annotations

import asyncio

import httpx
from aiolimiter import AsyncLimiter

from terradactyl.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    build_limiter,
    build_retry,
)

BASE_URL = "https://panel.example.com/api/application/"


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=2, backoff_factor=0.1))

    assert retry.total == 2
    assert retry.backoff_factor == 0.1


def test_build_limiter_follows_rate_limit() -> None:
    limiter = build_limiter(RateLimit(max_calls=10, per_seconds=2.0))

    assert build_limiter(None) is None
    assert limiter is not None
    assert limiter.max_rate == 10
    assert limiter.time_period == 2.0


def test_client_sends_through_limiter() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(f"{request.method} {request.url.path}")
        return httpx.Response(204)

    async def run() -> list[int]:
        config = ResilienceConfig(
            name="panel",
            base_url=BASE_URL,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        )
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=config.base_url or "",
                transport=httpx.MockTransport(handler),
            )
            responses = [
                await client.request("GET", "nodes"),
                await client.request("PATCH", "nodes/1", json={}),
                await client.request("DELETE", "nodes/1"),
            ]
        return [response.status_code for response in responses]

    assert asyncio.run(run()) == [204, 204, 204]
    assert seen == [
        "GET /api/application/nodes",
        "PATCH /api/application/nodes/1",
        "DELETE /api/application/nodes/1",
    ]


def test_injected_limiter_replaces_configured_one() -> None:
    shared = AsyncLimiter(5, 1.0)
    config = ResilienceConfig(
        name="panel",
        base_url=BASE_URL,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )

    async def run() -> tuple[AsyncLimiter | None, AsyncLimiter | None]:
        async with (
            ResilientClient(config, limiter=shared) as first,
            ResilientClient(config, limiter=shared) as second,
        ):
            return first._limiter, second._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    first_limiter, second_limiter = asyncio.run(run())

    assert first_limiter is shared
    assert second_limiter is shared


def test_client_without_rate_limit_skips_limiter() -> None:
    async def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"object": "list", "data": []})

    async def run() -> int:
        config = ResilienceConfig(name="panel", base_url=BASE_URL)
        async with ResilientClient(config) as client:
            assert client._limiter is None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=config.base_url or "",
                transport=httpx.MockTransport(handler),
            )
            response = await client.request("GET", "locations")
        return response.status_code

    assert asyncio.run(run()) == 200
