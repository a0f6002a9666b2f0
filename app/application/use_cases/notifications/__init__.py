"""Notification use cases."""

from app.application.use_cases.notifications.notification_operations import (
    NotificationService,
)

__all__ = ["NotificationService"]
