import asyncio
import re
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from k8s_demo.core.config import ServiceSettings
from k8s_demo.services.downstream import check_downstream, resolve_request_id

DOWNSTREAM_URL = "http://downstream.test/status/200"


class TestDownstreamCheckRoute:
    """Tests for GET /downstream-check."""

    def test_downstream_ok(self, client, stub_downstream):
        async def handler(request):
            return httpx.Response(200)

        stub_downstream(handler)
        response = client.get("/downstream-check")

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "upstreamStatus": 200,
            "downstreamUrl": DOWNSTREAM_URL,
        }

    def test_downstream_error_status_still_200(self, client, stub_downstream):
        async def handler(request):
            return httpx.Response(500)

        stub_downstream(handler)
        response = client.get("/downstream-check")

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["upstreamStatus"] == 500

    def test_connection_error_returns_503(self, client, stub_downstream):
        async def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        stub_downstream(handler)
        response = client.get("/downstream-check")

        assert response.status_code == 503
        assert response.json() == {
            "ok": False,
            "error": "connection refused",
            "downstreamUrl": DOWNSTREAM_URL,
        }

    def test_timeout_cancels_call(self, client, stub_downstream):
        cancelled = []

        async def handler(request):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise
            return httpx.Response(200)

        stub_downstream(handler)
        started = time.monotonic()
        response = client.get("/downstream-check")
        elapsed = time.monotonic() - started

        assert response.status_code == 503
        data = response.json()
        assert data["ok"] is False
        assert "timed out after 200ms" in data["error"]
        assert cancelled == [True]
        assert elapsed < 1.0

    def test_zero_timeout_fails_every_call(self, stub_downstream, app):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200)

        app.state.settings = ServiceSettings(
            _env_file=None, downstream_url=DOWNSTREAM_URL, downstream_timeout_ms=0
        )
        stub_downstream(handler)
        with TestClient(app) as client:
            response = client.get("/downstream-check")

        assert response.status_code == 503
        assert response.json()["ok"] is False
        assert "timed out after 0ms" in response.json()["error"]

    def test_non_ascii_request_id_returns_503(self, client, stub_downstream):
        async def handler(request):
            return httpx.Response(200)

        stub_downstream(handler)
        response = client.get("/downstream-check", headers={"x-request-id": b"caf\xe9"})

        assert response.status_code == 503
        data = response.json()
        assert data["ok"] is False
        assert data["error"]
        assert data["downstreamUrl"] == DOWNSTREAM_URL

    def test_forwards_request_id(self, client, stub_downstream):
        seen = []

        async def handler(request):
            seen.append(request.headers.get("x-request-id"))
            return httpx.Response(200)

        stub_downstream(handler)
        client.get("/downstream-check", headers={"x-request-id": "trace-42"})

        assert seen == ["trace-42"]

    def test_synthesizes_request_id(self, client, stub_downstream):
        seen = []

        async def handler(request):
            seen.append(request.headers.get("x-request-id"))
            return httpx.Response(200)

        stub_downstream(handler)
        client.get("/downstream-check")

        assert len(seen) == 1
        assert re.fullmatch(r"local-\d+", seen[0])


class TestCheckDownstream:
    """Tests for the downstream service function."""

    @pytest.mark.anyio
    async def test_unsupported_scheme_is_failure(self):
        async with httpx.AsyncClient() as client:
            result = await check_downstream(
                client, "ftp://downstream.test/", timeout_ms=500, request_id="r-1"
            )

        assert result.ok is False
        assert result.status is None
        assert result.error

    @pytest.mark.anyio
    async def test_success_status_reported(self):
        async def handler(request):
            return httpx.Response(204)

        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            result = await check_downstream(
                client, DOWNSTREAM_URL, timeout_ms=500, request_id="r-2"
            )

        assert result.ok is True
        assert result.status == 204
        assert result.error is None

    @pytest.mark.anyio
    async def test_empty_error_message_falls_back_to_type(self):
        async def handler(request):
            raise httpx.ReadError("", request=request)

        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            result = await check_downstream(
                client, DOWNSTREAM_URL, timeout_ms=500, request_id="r-3"
            )

        assert result.error == "ReadError"


class TestResolveRequestId:
    def test_keeps_incoming(self):
        assert resolve_request_id("abc") == "abc"

    def test_empty_is_synthesized(self):
        before = int(time.time() * 1000)
        request_id = resolve_request_id("")
        assert request_id.startswith("local-")
        assert int(request_id.removeprefix("local-")) >= before
