"""Shared pytest fixtures for the Epoch API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from epoch_api.main import create_app
from epoch_api.settings import Settings, reload_settings

_ENV_VARS = (
    "EPOCH_APP_NAME",
    "EPOCH_API_DOCS_ENABLED",
    "EPOCH_LOGGING_LEVEL",
    "EPOCH_SERVER_HOST",
    "EPOCH_SERVER_PORT",
    "EPOCH_SERVER_CORS_ORIGINS",
    "EPOCH_DEFAULT_TIMEZONE",
    "EPOCH_DEFAULT_FORMAT",
    "EPOCH_BATCH_MAX_VALUES",
    "EPOCH_BATCH_WORKERS",
)


def pytest_collection_modifyitems(config, items) -> None:
    for item in items:
        path_str = str(Path(str(item.fspath)))
        if "/tests/integration/" in path_str:
            item.add_marker(pytest.mark.integration)
        elif "/tests/unit/" in path_str:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep developer env vars and local .env files out of every test."""

    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    reload_settings()
    yield
    monkeypatch.undo()
    reload_settings()


@pytest.fixture()
def make_app() -> Callable[..., FastAPI]:
    """Build an application with explicit setting overrides."""

    def _build(**overrides: Any) -> FastAPI:
        return create_app(Settings(**overrides))

    return _build


@pytest.fixture()
def app(make_app: Callable[..., FastAPI]) -> FastAPI:
    return make_app()


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
