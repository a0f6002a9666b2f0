"""Messaging: delivery of document-change events to the rule engine."""

from app.infrastructure.messaging.change_feed import InProcessChangeFeed

__all__ = ["InProcessChangeFeed"]
