"""Change feed backed by the Firebase Realtime Database."""

from __future__ import annotations

import functools
import logging
import math
from typing import Any, AsyncIterator, Mapping

import anyio
import anyio.lowlevel
from anyio import from_thread
from firebase_admin import App, db

from app.application.ports import ChangeFeedStore, ChildEvent, join_path

from .tracker import ChildTracker

logger = logging.getLogger(__name__)


class FirebaseChangeFeed(ChangeFeedStore):
    """Watch database paths through the Admin SDK streaming listener.

    The SDK cannot stream a query, so ranged subscriptions listen on the
    whole path and filter children locally. The SDK delivers events on its
    own thread; they are handed over to the event loop that opened the
    subscription through an anyio memory stream.
    """

    def __init__(self, app: App | None = None) -> None:
        self._app = app

    def _reference(self, path: str) -> db.Reference:
        return db.reference("/" + join_path(path), app=self._app)

    async def subscribe(
        self,
        path: str,
        *,
        order_by: str | None = None,
        start_at: float | None = None,
    ) -> AsyncIterator[ChildEvent]:
        path = join_path(path)
        token = anyio.lowlevel.current_token()
        send, receive = anyio.create_memory_object_stream(math.inf)
        tracker = ChildTracker(
            path,
            order_by=order_by,
            start_at=start_at,
            fetch=lambda key: self._reference(join_path(path, key)).get(),
        )

        def on_event(event: db.Event) -> None:
            try:
                created = tracker.observe(event.event_type, event.path, event.data)
            except Exception:
                logger.exception("Could not process change on /%s%s", path, event.path)
                return
            for child in created:
                try:
                    from_thread.run_sync(send.send_nowait, child, token=token)
                except anyio.ClosedResourceError:
                    return

        registration = await anyio.to_thread.run_sync(
            self._reference(path).listen, on_event
        )
        logger.info(
            "Listening for new children under /%s (order_by=%s, start_at=%s)",
            path,
            order_by,
            start_at,
        )
        try:
            async with receive:
                async for child in receive:
                    yield child
        finally:
            send.close()
            # close() joins the SDK listener thread.
            with anyio.CancelScope(shield=True):
                await anyio.to_thread.run_sync(registration.close)
            logger.info("Stopped listening under /%s", path)

    async def get(self, path: str) -> Any:
        return await anyio.to_thread.run_sync(self._reference(path).get)

    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        await anyio.to_thread.run_sync(
            functools.partial(self._reference(path).update, dict(values))
        )


__all__ = ["FirebaseChangeFeed"]
