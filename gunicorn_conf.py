"""Gunicorn configuration for container deployment.

Usage:
    gunicorn k8s_demo.main:app -c gunicorn_conf.py
"""

import os

# ── Server Socket ─────────────────────────────
bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# ── Worker Processes ──────────────────────────
# The readiness flag lives in each worker; more than one worker makes
# POST /toggle-ready flip only the worker that served it.
workers = int(os.getenv("GUNICORN_WORKERS", "1"))
worker_class = "uvicorn.workers.UvicornWorker"
worker_tmp_dir = "/dev/shm"

# ── Timeouts ──────────────────────────────────
timeout = int(os.getenv("GUNICORN_TIMEOUT", "30"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "10"))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", "5"))

# ── Logging ───────────────────────────────────
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# ── Process Naming ────────────────────────────
proc_name = os.getenv("SERVICE_NAME", "k8s-demo-hello-world")

# ── Server Mechanics ─────────────────────────
preload_app = True
