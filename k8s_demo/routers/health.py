"""Kubernetes probe endpoints.

Provides ``/healthz`` (liveness), ``/readyz`` (readiness) and, for test
environments, ``POST /toggle-ready`` to flip the readiness flag by hand.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from k8s_demo.core.state import ReadinessState, get_readiness
from k8s_demo.schemas.probes import ReadyState

logger = structlog.get_logger(__name__)


def create_health_router(*, enable_toggle: bool = True) -> APIRouter:
    """Build the probe router.

    Args:
        enable_toggle: Mount ``POST /toggle-ready``. Leave off in production
            so nothing outside the process can drain it from a Service.

    Returns:
        A FastAPI ``APIRouter`` with the probe routes.
    """
    router = APIRouter(tags=["health"])

    @router.get("/healthz", response_class=PlainTextResponse, summary="Liveness probe")
    async def liveness() -> str:
        return "ok"

    @router.get("/readyz", response_class=PlainTextResponse, summary="Readiness probe")
    async def readiness(
        readiness_state: ReadinessState = Depends(get_readiness),
    ) -> PlainTextResponse:
        if not readiness_state.is_ready():
            return PlainTextResponse(
                "not ready", status_code=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        return PlainTextResponse("ready")

    if enable_toggle:

        @router.post("/toggle-ready", response_model=ReadyState, summary="Flip readiness")
        async def toggle_ready(
            readiness_state: ReadinessState = Depends(get_readiness),
        ) -> ReadyState:
            ready = readiness_state.toggle()
            logger.info("readiness_toggled", ready=ready)
            return ReadyState(ready=ready)

    return router
