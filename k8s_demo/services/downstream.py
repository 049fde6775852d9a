"""Downstream dependency check: one bounded, cancellable HTTP GET."""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import structlog

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


@dataclass(frozen=True)
class DownstreamResult:
    """Outcome of a single downstream call.

    ``status`` is set whenever the downstream answered, even with an error
    status; ``error`` is set only when no answer arrived.
    """

    ok: bool
    status: int | None = None
    error: str | None = None


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield a client scoped to the current request."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


def resolve_request_id(incoming: str | None) -> str:
    """Forward the caller's request id, or synthesize ``local-<epoch ms>``."""
    if incoming:
        return incoming
    return f"local-{int(time.time() * 1000)}"


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def check_downstream(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_ms: float,
    request_id: str,
) -> DownstreamResult:
    """GET ``url`` once, cancelling the request if it outlives ``timeout_ms``.

    The request runs inside an ``asyncio.timeout`` scope: on expiry the
    pending call is cancelled, which closes the connection httpx opened for
    it. Leaving the scope disarms the timer on every path.
    """
    try:
        async with asyncio.timeout(timeout_ms / 1000):
            # The scope above is the only deadline.
            response = await client.get(
                url,
                headers={REQUEST_ID_HEADER: request_id},
                timeout=None,
            )
    except TimeoutError:
        error = f"downstream request timed out after {timeout_ms:g}ms"
        logger.warning(
            "downstream_check_timeout",
            url=url,
            timeout_ms=timeout_ms,
            downstream_request_id=request_id,
        )
        return DownstreamResult(ok=False, error=error)
    # A non-ASCII x-request-id fails while httpx encodes the headers.
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        logger.warning(
            "downstream_check_failed",
            url=url,
            error=_describe(exc),
            error_type=exc.__class__.__name__,
            downstream_request_id=request_id,
        )
        return DownstreamResult(ok=False, error=_describe(exc))

    logger.info(
        "downstream_check_completed",
        url=url,
        upstream_status=response.status_code,
        downstream_request_id=request_id,
    )
    return DownstreamResult(ok=response.is_success, status=response.status_code)
