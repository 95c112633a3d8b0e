"""SQLAlchemy model for the profiles table owned by the account feature."""

from sqlalchemy import Column, String

from rating_notifications.infrastructure.database import Base


class ProfileModel(Base):
    """Public profile data. Read-only for the notification subsystem."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    display_name = Column(String(100), nullable=False)
    avatar_url = Column(String(500), nullable=True)


__all__ = ["ProfileModel"]
