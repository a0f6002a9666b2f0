"""Document change webhook: feeds pushed write events to the rule engine."""

import hashlib
import hmac
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.v1.dependencies import get_change_feed
from app.application.dtos.change import ChangeEvent
from app.application.interfaces.services import IChangeSubscription
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.change import ChangeAckResponse, ChangeNotificationRequest
from app.shared.telemetry.logging import get_logger
from app.shared.utils.generators import generate_event_id

logger = get_logger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "X-Webhook-Signature-256"


def _verify_webhook_signature(body: bytes, signature_header: str | None, secret: str) -> bool:
    """Return True if the signature header matches HMAC-SHA256(secret, body)."""
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature_header[7:].strip(), expected)


@router.post("", response_model=ChangeAckResponse, status_code=202)
@limit_writes
async def receive_change(
    request: Request,
    background_tasks: BackgroundTasks,
    change_feed: Annotated[IChangeSubscription, Depends(get_change_feed)],
):
    """Accept one document change and evaluate rules in the background.

    CHANGE_WEBHOOK_SECRET must be set, and callers must send
    X-Webhook-Signature-256: sha256=<hmac_sha256(secret, body)>.
    """
    body = await request.body()
    secret = get_settings().change_webhook_secret
    if secret is None or not secret.get_secret_value():
        raise HTTPException(status_code=503, detail="Change webhook is not configured")
    if not _verify_webhook_signature(body, request.headers.get(SIGNATURE_HEADER), secret.get_secret_value()):
        raise HTTPException(status_code=401, detail="Invalid or missing webhook signature")
    try:
        payload = ChangeNotificationRequest.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e

    event = ChangeEvent(
        collection=payload.collection,
        document_id=payload.document_id,
        after=payload.after,
        before=payload.before,
        event_id=payload.event_id or generate_event_id(payload.collection, payload.document_id),
    )
    logger.info("Change accepted: %s/%s (%s)", event.collection, event.document_id, event.event_id)
    background_tasks.add_task(change_feed.publish, event)
    return ChangeAckResponse(event_id=event.event_id)
