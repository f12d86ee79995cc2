from .health import PingResponse
from .push import ErrorResponse, TestPushRequest, TestPushResponse

__all__ = [
    "ErrorResponse",
    "PingResponse",
    "TestPushRequest",
    "TestPushResponse",
]
