"""Pydantic models describing the manual push endpoint payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TestPushRequest(BaseModel):
    """Payload used to send a manual push to a user."""

    uid: str | None = Field(default=None, description="Target user identifier")
    title: str | None = Field(default=None, description="Notification title")
    body: str | None = Field(default=None, description="Notification body")


class TestPushResponse(BaseModel):
    sent: bool


class ErrorResponse(BaseModel):
    error: str


__all__ = ["ErrorResponse", "TestPushRequest", "TestPushResponse"]
