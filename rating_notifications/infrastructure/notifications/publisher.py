"""Utility helpers to push notifications to live subscribers."""

from __future__ import annotations

from typing import Any

from rating_notifications.config import get_settings
from rating_notifications.domain.entities import Notification

from .manager import DeliveryChannel


class NotificationPublisher:
    """Serialize notifications and hand them to the delivery channel."""

    def __init__(self, channel: DeliveryChannel) -> None:
        self._channel = channel

    def dispatch(self, notification: Notification) -> int:
        """Deliver ``notification`` to its recipient's open subscriptions."""

        message = {"type": "notification", "data": self._serialize(notification)}
        return self._channel.publish(notification.recipient_id, message)

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        actor = notification.actor
        return {
            "id": notification.id,
            "type": notification.type.value,
            "actor": {
                "id": actor.id,
                "display_name": actor.display_name,
                "avatar_url": actor.avatar_url,
            }
            if actor
            else {"id": notification.actor_id, "display_name": None, "avatar_url": None},
            "rating_id": notification.subject_rating_id,
            "comment_id": notification.subject_comment_id,
            "is_read": notification.is_read,
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
        }


delivery_channel = DeliveryChannel(queue_size=get_settings().delivery_queue_size)
notification_publisher = NotificationPublisher(delivery_channel)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the realtime payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "delivery_channel",
    "notification_publisher",
    "serialize_notification",
]
