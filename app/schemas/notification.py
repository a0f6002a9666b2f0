"""Notification API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationCreateRequest(BaseModel):
    """Request body for sending one notification."""

    model_config = ConfigDict(populate_by_name=True)

    member_id: str = Field(..., min_length=1, alias="memberId")
    type: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationBulkRequest(BaseModel):
    """Request body for sending the same notification to many members."""

    model_config = ConfigDict(populate_by_name=True)

    member_ids: list[str] = Field(..., min_length=1, max_length=500, alias="memberIds")
    type: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationSentResponse(BaseModel):
    id: str


class NotificationBulkResponse(BaseModel):
    sent: int
    ids: list[str]


class ReminderRunResponse(BaseModel):
    """Outcome of one reminder job run."""

    model_config = ConfigDict(from_attributes=True)

    job: str
    sent: int
    notification_ids: list[str]
