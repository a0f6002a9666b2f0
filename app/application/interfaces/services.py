"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.change import ChangeEvent

ChangeHandler = Callable[["ChangeEvent"], Awaitable[Any]]


# Email delivery (send_email action, notification fan-out)
class IEmailSender(Protocol):
    """Protocol for delivering an email to a list of recipients."""

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        """Deliver the message. May raise; callers treat delivery as fire-and-forget."""


# Change notification source
class IChangeSubscription(Protocol):
    """Protocol through which the rule engine receives document-change events.

    Decouples the engine from how changes are delivered (webhook push,
    in-process store hooks, polling).
    """

    def subscribe(self, handler: ChangeHandler) -> None:
        """Register a handler called once per published event."""

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver the event to every subscriber. Never raises for handler failures."""


# Redelivery guard
class IEventDeduplicator(Protocol):
    """Protocol for claiming a change event id so redeliveries can be skipped."""

    async def claim(self, event_id: str) -> bool:
        """Return True the first time event_id is claimed, False for a duplicate."""


# Message templating (send_email subject/body)
class IMessageRenderer(Protocol):
    """Protocol for rendering a message template against an action context."""

    def render(self, template: str, context: dict[str, Any]) -> str:
        """Return the rendered text. Raises on a malformed template."""
