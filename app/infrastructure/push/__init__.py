"""Push delivery backends and the provider wrapping them."""

from .dry_run import DryRunPushTransport
from .provider import PushProvider

__all__ = ["DryRunPushTransport", "PushProvider"]
