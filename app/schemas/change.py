"""Document change notification (webhook) schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeNotificationRequest(BaseModel):
    """One document write pushed by the store's change notification source.

    after is null for deletions. event_id identifies the change across
    redeliveries.
    """

    model_config = ConfigDict(populate_by_name=True)

    collection: str = Field(..., min_length=1, max_length=256)
    document_id: str = Field(..., alias="documentId", min_length=1, max_length=1500)
    after: dict[str, Any] | None = None
    before: dict[str, Any] | None = None
    event_id: str | None = Field(default=None, alias="eventId", max_length=256)


class ChangeAckResponse(BaseModel):
    """202 acknowledgement; rules run in the background."""

    accepted: bool = True
    event_id: str
