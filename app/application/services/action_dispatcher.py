"""Action dispatcher: executes one action descriptor against the document store.

Each call performs at most one store write (send_email performs none) and
neither batches nor retries; retry policy belongs to the caller. Descriptors
are parsed into the typed action union first, so a malformed descriptor fails
before anything is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.interfaces.store import SERVER_TIMESTAMP
from app.core.constants import COLLECTION_POINTS, DEFAULT_POINTS_REASON
from app.domain.value_objects.actions import (
    AwardPointsAction,
    CreateRecordAction,
    SendEmailAction,
    UpdateFieldAction,
    parse_action_spec,
)
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.services import IEmailSender, IMessageRenderer
    from app.application.interfaces.store import IDocumentStore

logger = get_logger(__name__)


class ActionDispatcher:
    """Runs send_email, update_field, create_record and award_points actions."""

    def __init__(
        self,
        store: IDocumentStore,
        email_sender: IEmailSender | None = None,
        renderer: IMessageRenderer | None = None,
    ) -> None:
        self._store = store
        self._email_sender = email_sender
        self._renderer = renderer

    async def execute(self, action: Any, context: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute one action and return its result mapping.

        Args:
            action: Raw descriptor mapping (or an already parsed action model).
            context: Workflow context or rule context; used for message rendering.

        Raises:
            UnknownActionTypeException: type outside the catalog.
            ActionConfigurationException: required keys absent or malformed.
            Exception: store failures propagate unchanged.
        """
        spec = parse_action_spec(action)
        ctx = context or {}
        if isinstance(spec, SendEmailAction):
            return await self._send_email(spec, ctx)
        if isinstance(spec, UpdateFieldAction):
            return await self._update_field(spec)
        if isinstance(spec, CreateRecordAction):
            return await self._create_record(spec)
        return await self._award_points(spec)

    def _render(self, template: str | None, context: dict[str, Any]) -> str:
        text = template or ""
        if self._renderer is None or not text:
            return text
        try:
            return self._renderer.render(text, context)
        except Exception:
            logger.warning("Email template could not be rendered; sending raw text", exc_info=True)
            return text

    async def _send_email(self, spec: SendEmailAction, context: dict[str, Any]) -> dict[str, Any]:
        recipients = spec.recipients()
        subject = self._render(spec.subject, context)
        body = self._render(spec.body, context)
        if self._email_sender is None:
            logger.info("send_email: no sender configured (to=%s, subject=%r)", recipients, subject[:80])
        else:
            try:
                await self._email_sender.send(recipients, subject, body)
                logger.info("send_email: delivered to %d recipient(s)", len(recipients))
            except Exception:
                logger.exception("send_email: delivery failed (to=%s)", recipients)
        return {"email_sent": True, "to": spec.to}

    async def _update_field(self, spec: UpdateFieldAction) -> dict[str, Any]:
        await self._store.update(
            spec.collection,
            spec.document_id,
            {spec.field: spec.value, "updated_at": SERVER_TIMESTAMP},
        )
        return {"field_updated": True}

    async def _create_record(self, spec: CreateRecordAction) -> dict[str, Any]:
        document_id = await self._store.create(
            spec.collection, {**spec.data, "created_at": SERVER_TIMESTAMP}
        )
        return {"record_created": True, "document_id": document_id}

    async def _award_points(self, spec: AwardPointsAction) -> dict[str, Any]:
        record: dict[str, Any] = {
            "member_id": spec.member_id,
            "points": spec.points,
            "reason": spec.reason or DEFAULT_POINTS_REASON,
            "created_at": SERVER_TIMESTAMP,
        }
        if spec.source is not None:
            record["source"] = spec.source
        if spec.applied_rules is not None:
            record["applied_rules"] = spec.applied_rules
        if spec.activity_data is not None:
            record["activity_data"] = spec.activity_data
        await self._store.create(COLLECTION_POINTS, record)
        return {"points_awarded": True, "points": spec.points}
