"""In-process change feed (implements IChangeSubscription).

Subscribers are awaited sequentially for each published event. A failing
subscriber is logged and does not prevent delivery to the others, and never
propagates to the publisher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.change import ChangeEvent
    from app.application.interfaces.services import ChangeHandler

logger = get_logger(__name__)


class InProcessChangeFeed:
    """Fans change events out to subscribers within this process."""

    def __init__(self) -> None:
        self._handlers: list[ChangeHandler] = []

    def subscribe(self, handler: ChangeHandler) -> None:
        self._handlers.append(handler)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    async def publish(self, event: ChangeEvent) -> None:
        for handler in list(self._handlers):
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "Change handler %r failed for %s/%s",
                    handler,
                    event.collection,
                    event.document_id,
                )
