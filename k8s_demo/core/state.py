"""Process-wide readiness flag and the dependency that hands it to routes."""

from __future__ import annotations

import threading

from fastapi import Request


class ReadinessState:
    """Boolean readiness flag guarded by a lock.

    Sync routes run in the threadpool while async routes run on the event
    loop, so reads and flips go through the same lock.
    """

    def __init__(self, ready: bool = True) -> None:
        self._ready = ready
        self._lock = threading.Lock()

    def is_ready(self) -> bool:
        with self._lock:
            return self._ready

    def toggle(self) -> bool:
        """Invert the flag and return the new value."""
        with self._lock:
            self._ready = not self._ready
            return self._ready

    def __repr__(self) -> str:
        return f"ReadinessState(ready={self.is_ready()})"


def get_readiness(request: Request) -> ReadinessState:
    return request.app.state.readiness
