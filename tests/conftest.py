from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from k8s_demo.core.config import ServiceSettings
from k8s_demo.main import create_app
from k8s_demo.services.downstream import get_http_client

DOWNSTREAM_URL = "http://downstream.test/status/200"

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(
        _env_file=None,
        downstream_url=DOWNSTREAM_URL,
        downstream_timeout_ms=200,
    )


@pytest.fixture
def app(settings: ServiceSettings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stub_downstream(app: FastAPI) -> Callable[[Handler], None]:
    """Route the downstream check through an in-process handler."""

    def install(handler: Handler) -> None:
        async def _client():
            transport = httpx.MockTransport(handler)
            async with httpx.AsyncClient(transport=transport) as stub_client:
                yield stub_client

        app.dependency_overrides[get_http_client] = _client

    return install
