"""FastAPI dependency utilities."""

from fastapi import HTTPException, Request, status

from app.infrastructure.relay import Relay


def get_relay(request: Request) -> Relay:
    """Return the relay attached to the running application."""

    relay = getattr(request.app.state, "relay", None)
    if relay is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Relay not initialized",
        )
    return relay
