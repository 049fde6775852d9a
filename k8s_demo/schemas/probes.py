"""Response bodies for the greeting, readiness and downstream routes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class Greeting(BaseModel):
    message: str
    service: str
    timestamp: str


class ReadyState(BaseModel):
    ready: bool


class DownstreamOk(BaseModel):
    ok: bool
    upstreamStatus: int
    downstreamUrl: str


class DownstreamFailure(BaseModel):
    ok: Literal[False] = False
    error: str
    downstreamUrl: str
