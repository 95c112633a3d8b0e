"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from rating_notifications.domain.entities import Notification
from rating_notifications.infrastructure.models import NotificationModel
from rating_notifications.utils import app_now, from_storage, to_storage

from .errors import storage_errors


class NotificationRepository:
    """Store, list and mark :class:`Notification` objects as read.

    Every write commits before returning so that counts read afterwards through
    the same or another session already reflect it.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, notification: Notification) -> Notification:
        """Persist ``notification`` and return it with ``id`` and ``created_at`` set."""

        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        with storage_errors(self.session, "insert notification"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def get(self, recipient_id: str, notification_id: str) -> Notification | None:
        with storage_errors(self.session, "load notification"):
            model = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .filter(NotificationModel.recipient_id == recipient_id)
                .one_or_none()
            )
        return self._to_entity(model) if model else None

    def list_for_recipient(
        self,
        recipient_id: str,
        *,
        limit: int | None = 20,
    ) -> Sequence[Notification]:
        """Return the newest notifications of ``recipient_id`` first."""

        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.recipient_id == recipient_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        with storage_errors(self.session, "list notifications"):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def unread_count(self, recipient_id: str) -> int:
        with storage_errors(self.session, "count unread notifications"):
            count = (
                self.session.query(func.count(NotificationModel.id))
                .filter(NotificationModel.recipient_id == recipient_id)
                .filter(NotificationModel.is_read.is_(False))
                .scalar()
            )
        return int(count or 0)

    def mark_as_read(
        self, recipient_id: str, notification_id: str | None = None
    ) -> int:
        """Mark one notification, or every unread one, of ``recipient_id`` as read.

        Ids that do not exist or belong to someone else are ignored. All unread
        rows are updated by a single statement. Returns how many rows changed.
        """

        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read.is_(False))
        )
        if notification_id is not None:
            query = query.filter(NotificationModel.id == notification_id)
        with storage_errors(self.session, "mark notifications as read"):
            updated = query.update(
                {NotificationModel.is_read: True}, synchronize_session=False
            )
            self.session.commit()
        return int(updated or 0)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        if notification.id is not None:
            model.id = notification.id
        model.created_at = to_storage(notification.created_at or app_now())
        model.recipient_id = notification.recipient_id
        model.type = notification.type.value
        model.actor_id = notification.actor_id
        model.subject_rating_id = notification.subject_rating_id
        model.subject_comment_id = notification.subject_comment_id
        model.is_read = notification.is_read

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=model.type,
            recipient_id=model.recipient_id,
            actor_id=model.actor_id,
            subject_rating_id=model.subject_rating_id,
            subject_comment_id=model.subject_comment_id,
            is_read=bool(model.is_read),
            created_at=from_storage(model.created_at),
        )


__all__ = ["NotificationRepository"]
