"""Infrastructure services: email delivery and message templating."""

from app.infrastructure.services.email_sender import LogOnlyEmailSender
from app.infrastructure.services.message_renderer import JinjaMessageRenderer

__all__ = ["JinjaMessageRenderer", "LogOnlyEmailSender"]
