# This project was developed with assistance from AI tools.
"""LINE Messaging API webhook.

The platform retries any non-2xx answer, so once the body is accepted the
endpoint answers ``OK`` whatever happened to individual events.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ..core.config import settings
from ..dependencies import Engine
from ..schemas.line import WebhookBody
from ..services.delivery import verify_signature

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "x-line-signature"


@router.get("/webhook", response_class=PlainTextResponse)
async def webhook_ping() -> str:
    return "OK"


@router.post("/webhook", response_class=PlainTextResponse)
async def receive_webhook(request: Request, engine: Engine) -> str:
    """Verify, parse and dispatch one webhook batch."""
    body = await request.body()

    if settings.VERIFY_WEBHOOK_SIGNATURE and settings.LINE_CHANNEL_SECRET:
        if not verify_signature(
            settings.LINE_CHANNEL_SECRET, body, request.headers.get(SIGNATURE_HEADER)
        ):
            logger.warning("Rejected webhook with a bad or missing signature")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid webhook signature",
            )

    try:
        payload = WebhookBody.model_validate_json(body or b"{}")
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed webhook body",
        ) from exc

    handled = await engine.handle_events(payload.events)
    logger.debug("Webhook batch: %d/%d events handled", handled, len(payload.events))
    return "OK"
