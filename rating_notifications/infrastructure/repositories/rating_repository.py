"""Ownership and comment authorship lookups on ratings."""

from __future__ import annotations

from sqlalchemy.orm import Session

from rating_notifications.infrastructure.models import RatingCommentModel, RatingModel

from .errors import storage_errors


class RatingRepository:
    """Answer who owns a rating and who has commented on it."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def owner_of(self, rating_id: int) -> str | None:
        with storage_errors(self.session, "load rating owner"):
            owner_id = (
                self.session.query(RatingModel.profile_id)
                .filter(RatingModel.id == rating_id)
                .scalar()
            )
        return owner_id

    def commenter_ids(
        self, rating_id: int, *, exclude_comment_id: str | None = None
    ) -> list[str]:
        """Return the distinct authors of comments on ``rating_id``, oldest first."""

        query = self.session.query(
            RatingCommentModel.profile_id, RatingCommentModel.created_at
        ).filter(RatingCommentModel.rating_id == rating_id)
        if exclude_comment_id is not None:
            query = query.filter(RatingCommentModel.id != exclude_comment_id)
        query = query.order_by(RatingCommentModel.created_at.asc())
        with storage_errors(self.session, "list rating commenters"):
            rows = query.all()

        authors: list[str] = []
        for profile_id, _created_at in rows:
            if profile_id not in authors:
                authors.append(profile_id)
        return authors


__all__ = ["RatingRepository"]
