"""Domain entity representing a social notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .profile import Profile


class NotificationType(str, Enum):
    """Kinds of social activity a profile can be notified about."""

    LIKE = "like"
    COMMENT = "comment"
    REPLY = "reply"
    MENTION = "mention"


# Only these types may reference the comment that triggered them.
COMMENT_BEARING_TYPES = frozenset(
    {NotificationType.COMMENT, NotificationType.REPLY, NotificationType.MENTION}
)


@dataclass
class Notification:
    """Information message delivered to a specific profile.

    ``is_read`` only ever moves from ``False`` to ``True``. ``created_at`` is
    assigned by the store when the record is inserted and drives the newest-first
    ordering of the feed.
    """

    id: str | None
    type: NotificationType
    recipient_id: str
    actor_id: str
    subject_rating_id: int
    subject_comment_id: str | None = None
    is_read: bool = False
    created_at: datetime | None = None
    actor: Profile | None = None

    def __post_init__(self) -> None:
        self.type = NotificationType(self.type)
        if self.actor_id == self.recipient_id:
            raise ValueError("A profile cannot be notified about its own activity")
        if self.type not in COMMENT_BEARING_TYPES:
            self.subject_comment_id = None


__all__ = ["Notification", "NotificationType", "COMMENT_BEARING_TYPES"]
