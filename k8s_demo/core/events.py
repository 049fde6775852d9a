"""Application lifespan (startup / shutdown hooks)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the effective configuration on startup and shutdown."""
    settings = app.state.settings
    log.info(
        "server listening",
        port=settings.port,
        downstream_url=settings.downstream_url,
        downstream_timeout_ms=settings.downstream_timeout_ms,
        readiness_toggle=settings.enable_readiness_toggle,
    )

    yield

    log.info("server shutting down", ready=app.state.readiness.is_ready())
