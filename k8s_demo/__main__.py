"""Run the service with a single uvicorn process.

Usage:
    python -m k8s_demo
"""

from __future__ import annotations

import uvicorn

from k8s_demo.core.config import settings


def main() -> None:
    uvicorn.run(
        "k8s_demo.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
