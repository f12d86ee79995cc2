from fastapi import FastAPI

from .health import router as health_router
from .push import router as push_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(push_router)
