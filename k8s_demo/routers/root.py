"""Greeting endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends

from k8s_demo.core.config import ServiceSettings, get_settings
from k8s_demo.schemas.probes import Greeting

router = APIRouter(tags=["greeting"])
logger = structlog.get_logger(__name__)

GREETING = "hello world from k8s-demo"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/", response_model=Greeting)
async def root(settings: ServiceSettings = Depends(get_settings)) -> Greeting:
    logger.info("root_hit")
    return Greeting(
        message=GREETING,
        service=settings.service_name,
        timestamp=utc_timestamp(),
    )
