"""structlog setup for the demo service.

Every line carries the service name and the request/correlation ids bound by
``RequestContextMiddleware``. Kubelet probe hits are dropped from the uvicorn
access log; all other requests stay in it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

PROBE_PATHS = frozenset({"/healthz", "/readyz"})


class ProbeAccessFilter(logging.Filter):
    """Drop ``uvicorn.access`` records for liveness/readiness probes."""

    def __init__(self, paths: frozenset[str] = PROBE_PATHS) -> None:
        super().__init__()
        self.paths = paths

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn logs (client_addr, method, full_path, http_version, status)
        args = record.args
        if not isinstance(args, tuple) or len(args) < 3:
            return True
        path = str(args[2]).split("?", 1)[0]
        return path not in self.paths


def setup_logging(
    *,
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "k8s-demo-hello-world",
) -> None:
    """Route structlog and stdlib logging to stdout through one formatter.

    ``json_logs`` is on in production so the cluster log shipper can parse
    the lines.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _bind_service(service_name),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, ProbeAccessFilter) for f in access_logger.filters):
        access_logger.addFilter(ProbeAccessFilter())

    # One line per downstream check is logged by the service itself.
    for chatty in ("httpx", "httpcore"):
        logging.getLogger(chatty).setLevel(logging.WARNING)


def _bind_service(service_name: str) -> structlog.types.Processor:
    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor
