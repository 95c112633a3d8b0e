"""SQLAlchemy model for per-profile notification preferences."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.sql import expression

from rating_notifications.infrastructure.database import Base


class NotificationSettingsModel(Base):
    """One row per profile; every flag starts enabled."""

    __tablename__ = "notification_settings"

    profile_id = Column(String(36), primary_key=True)
    notify_on_like = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    notify_on_comment = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    notify_on_reply = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    notify_on_mention = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )


__all__ = ["NotificationSettingsModel"]
