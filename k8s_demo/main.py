"""k8s-demo hello-world — FastAPI application factory.

Exposes liveness/readiness probes, a greeting and a downstream health check.
"""

from __future__ import annotations

from fastapi import FastAPI

from k8s_demo.core.config import ServiceSettings, settings as default_settings
from k8s_demo.core.events import lifespan
from k8s_demo.core.logging import setup_logging
from k8s_demo.core.middleware import RequestContextMiddleware
from k8s_demo.core.state import ReadinessState
from k8s_demo.routers import downstream, root
from k8s_demo.routers.health import create_health_router


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    settings = settings or default_settings

    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.service_name,
    )

    application = FastAPI(
        title="k8s-demo hello world",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.readiness = ReadinessState(ready=settings.initial_ready)

    application.add_middleware(RequestContextMiddleware)

    # Routers
    application.include_router(root.router)
    application.include_router(
        create_health_router(enable_toggle=settings.enable_readiness_toggle)
    )
    application.include_router(downstream.router)

    return application


app = create_app()
