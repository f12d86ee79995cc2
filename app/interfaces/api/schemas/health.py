"""Pydantic models for the liveness endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class PingResponse(BaseModel):
    """Health snapshot returned by ``/ping``."""

    ok: bool
    uptime: int
    time: int


__all__ = ["PingResponse"]
