"""Aggregate application use cases."""

from .dispatch import DispatchEngine
from .send_test_push import MissingDeviceTokenError, send_test_push
from .watch import ChangeFeedWatcher, ListenerRegistry

__all__ = [
    "ChangeFeedWatcher",
    "DispatchEngine",
    "ListenerRegistry",
    "MissingDeviceTokenError",
    "send_test_push",
]
