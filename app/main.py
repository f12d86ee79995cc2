"""FastAPI application hosting the push relay."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.infrastructure.keepalive import KeepAlivePinger
from app.infrastructure.relay import Relay, build_relay
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None, relay: Relay | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``relay`` replaces the one built from ``settings``; tests use it to run
    against in-memory backends.
    """

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the relay and keepalive on boot and stop them on shutdown."""

        app.state.relay = relay or build_relay(settings)
        if settings.relay_autostart:
            app.state.relay.start()

        keepalive_task = None
        if settings.keepalive_url:
            pinger = KeepAlivePinger(
                settings.keepalive_url,
                interval_seconds=settings.keepalive_interval_seconds,
            )
            keepalive_task = asyncio.get_running_loop().create_task(pinger.run())
            logger.info("Keepalive enabled for %s", pinger.url)

        yield

        if keepalive_task is not None:
            keepalive_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await keepalive_task
        await app.state.relay.stop()

    app = FastAPI(title="Push Relay", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app
