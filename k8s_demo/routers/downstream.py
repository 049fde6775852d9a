"""Downstream health-check proxy."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from k8s_demo.core.config import ServiceSettings, get_settings
from k8s_demo.schemas.probes import DownstreamFailure, DownstreamOk
from k8s_demo.services.downstream import (
    check_downstream,
    get_http_client,
    resolve_request_id,
)

router = APIRouter(tags=["downstream"])


@router.get(
    "/downstream-check",
    response_model=DownstreamOk,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": DownstreamFailure}},
)
async def downstream_check(
    x_request_id: str | None = Header(default=None),
    settings: ServiceSettings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> DownstreamOk | JSONResponse:
    """Probe the configured downstream once.

    Any answer from the downstream, whatever its status, yields 200; only a
    failed or timed-out call yields 503.
    """
    result = await check_downstream(
        client,
        settings.downstream_url,
        timeout_ms=settings.downstream_timeout_ms,
        request_id=resolve_request_id(x_request_id),
    )

    if result.status is None:
        failure = DownstreamFailure(
            error=result.error or "downstream request failed",
            downstreamUrl=settings.downstream_url,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=failure.model_dump(),
        )

    return DownstreamOk(
        ok=result.ok,
        upstreamStatus=result.status,
        downstreamUrl=settings.downstream_url,
    )
