"""SQLAlchemy models for ratings and their comments.

Both tables belong to the rating feature; notifications only read ownership and
comment authorship from them.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from rating_notifications.infrastructure.database import Base
from rating_notifications.utils import storage_now


class RatingModel(Base):
    """A flavor rating posted by a profile."""

    __tablename__ = "sake_flavor_ratings"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)


class RatingCommentModel(Base):
    """A comment left on a rating."""

    __tablename__ = "sake_rating_comments"

    id = Column(String(36), primary_key=True)
    rating_id = Column(
        Integer, ForeignKey("sake_flavor_ratings.id"), nullable=False, index=True
    )
    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(), nullable=False, default=storage_now)


__all__ = ["RatingCommentModel", "RatingModel"]
