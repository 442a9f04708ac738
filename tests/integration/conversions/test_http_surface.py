"""CORS, preflight and fault-handling behavior shared by every endpoint."""

from __future__ import annotations

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from epoch_api.features.conversions.dependencies import get_conversion_service

pytestmark = pytest.mark.asyncio


@pytest.mark.parametrize(
    ("method", "path", "kwargs"),
    [
        ("GET", "/api/unix-to-date", {"params": {"timestamp": "1640995200"}}),
        ("GET", "/api/unix-to-date", {"params": {"timestamp": "abc"}}),
        ("GET", "/api/date-to-unix", {"params": {"date": "2022-01-01"}}),
        ("POST", "/api/batch-convert", {"json": {"type": "unix-to-date", "values": ["0"]}}),
    ],
)
async def test_responses_allow_any_origin(
    async_client: AsyncClient,
    method: str,
    path: str,
    kwargs: dict,
) -> None:
    response = await async_client.request(method, path, **kwargs)

    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.parametrize("path", ["/api/unix-to-date", "/api/date-to-unix", "/api/batch-convert"])
async def test_preflight_succeeds(async_client: AsyncClient, path: str) -> None:
    response = await async_client.options(path)

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


async def test_browser_preflight_is_answered(async_client: AsyncClient) -> None:
    response = await async_client.options(
        "/api/batch-convert",
        headers={
            "Origin": "http://example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


async def test_restricted_origins_do_not_stamp_wildcard(make_app) -> None:
    app = make_app(server_cors_origins=["http://allowed.test"])
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/api/unix-to-date", params={"timestamp": "0"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


async def test_unexpected_fault_returns_generic_500(make_app) -> None:
    class _ExplodingService:
        def unix_to_date(self, *args, **kwargs):
            raise RuntimeError("zone database exploded")

    app = make_app()
    app.dependency_overrides[get_conversion_service] = lambda: _ExplodingService()
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/api/unix-to-date", params={"timestamp": "0"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["access-control-allow-origin"] == "*"


async def test_unknown_route_uses_error_envelope(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
