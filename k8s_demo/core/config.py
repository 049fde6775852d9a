"""Service configuration using Pydantic Settings.

Values are loaded from environment variables and .env files.
"""

from __future__ import annotations

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """Settings for the hello-world demo service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── General ───────────────────────────────
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "k8s-demo-hello-world"
    port: int = 8080

    # ── Downstream check ──────────────────────
    downstream_url: str = "https://httpbin.org/status/200"
    downstream_timeout_ms: float = 1500

    # ── Readiness ─────────────────────────────
    initial_ready: bool = True
    # Turn off outside test environments to drop POST /toggle-ready.
    enable_readiness_toggle: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def json_logs(self) -> bool:
        return self.is_production


settings = ServiceSettings()


def get_settings(request: Request) -> ServiceSettings:
    """Return the settings the running app was built with."""
    return request.app.state.settings
