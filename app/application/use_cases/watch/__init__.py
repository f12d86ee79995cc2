"""Use cases that watch the change feeds."""

from .listener_registry import ListenerRegistry
from .watcher import ChangeFeedWatcher

__all__ = ["ChangeFeedWatcher", "ListenerRegistry"]
