"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rating_notifications.domain.entities import NotificationType


class ActorRead(BaseModel):
    """Profile that triggered a notification."""

    id: str
    display_name: str | None = None
    avatar_url: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    type: NotificationType
    actor: ActorRead
    rating_id: int
    comment_id: str | None = None
    is_read: bool
    created_at: datetime


class UnreadCountRead(BaseModel):
    unread_count: int = Field(..., ge=0)


class NotificationMarkReadRequest(BaseModel):
    """Mark a single notification read, or all of them when ``id`` is omitted."""

    id: str | None = Field(default=None, description="Notification identifier")


class NotificationSettingsRead(BaseModel):
    notify_on_like: bool
    notify_on_comment: bool
    notify_on_reply: bool
    notify_on_mention: bool


class NotificationSettingsUpdate(BaseModel):
    """Partial update; omitted flags keep their current value."""

    model_config = ConfigDict(extra="forbid")

    notify_on_like: bool | None = None
    notify_on_comment: bool | None = None
    notify_on_reply: bool | None = None
    notify_on_mention: bool | None = None


__all__ = [
    "ActorRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationSettingsRead",
    "NotificationSettingsUpdate",
    "UnreadCountRead",
]
