"""Endpoint used to verify push delivery by hand."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.application.use_cases import MissingDeviceTokenError, send_test_push
from app.infrastructure.relay import Relay
from app.interfaces.api.dependencies import get_relay
from app.interfaces.api.schemas import ErrorResponse, TestPushRequest, TestPushResponse

router = APIRouter(tags=["push"])


@router.post(
    "/test-push",
    response_model=TestPushResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def test_push(
    payload: TestPushRequest,
    relay: Relay = Depends(get_relay),
):
    """Send a push to ``uid`` using its registered device token."""

    if not payload.uid:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "uid required"}
        )

    try:
        sent = await send_test_push(
            relay.token_registry,
            relay.push_provider,
            user_id=payload.uid,
            title=payload.title,
            body=payload.body,
        )
    except MissingDeviceTokenError as exc:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    return TestPushResponse(sent=sent)
