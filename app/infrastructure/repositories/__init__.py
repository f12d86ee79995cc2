"""Repository implementations for infrastructure layer."""

from .delivery_ledger import DELIVERED_FIELD, DeliveryLedger
from .token_registry import TOKEN_FIELD, USERS_PATH, TokenRegistry

__all__ = [
    "DELIVERED_FIELD",
    "DeliveryLedger",
    "TOKEN_FIELD",
    "TokenRegistry",
    "USERS_PATH",
]
