"""SQLAlchemy model for persisted notifications."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.sql import expression

from rating_notifications.infrastructure.database import Base
from rating_notifications.utils import storage_now


def _new_notification_id() -> str:
    return str(uuid.uuid4())


class NotificationModel(Base):
    """Database representation for profile notifications."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_created", "recipient_id", "created_at"),
        Index("ix_notifications_recipient_unread", "recipient_id", "is_read"),
    )

    id = Column(String(36), primary_key=True, default=_new_notification_id)
    recipient_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    type = Column(String(20), nullable=False)
    actor_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    subject_rating_id = Column(Integer, nullable=False)
    subject_comment_id = Column(String(36), nullable=True)
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=storage_now)


__all__ = ["NotificationModel"]
