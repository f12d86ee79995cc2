from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.domain.entities import wall_clock_millis
from app.infrastructure.relay import Relay
from app.interfaces.api.dependencies import get_relay
from app.interfaces.api.schemas import PingResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root(relay: Relay = Depends(get_relay)) -> str:
    return f"✅ Radio Bingo Push Server is running! Uptime: {relay.uptime_seconds()}s"


@router.get("/ping", response_model=PingResponse)
async def ping(relay: Relay = Depends(get_relay)) -> PingResponse:
    """Health check endpoint, also the keepalive target."""

    return PingResponse(ok=True, uptime=relay.uptime_seconds(), time=int(wall_clock_millis()))
