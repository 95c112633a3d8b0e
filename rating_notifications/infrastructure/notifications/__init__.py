"""Realtime notification helpers for the infrastructure layer."""

from .manager import DeliveryChannel, Subscription
from .publisher import (
    NotificationPublisher,
    delivery_channel,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "DeliveryChannel",
    "Subscription",
    "NotificationPublisher",
    "delivery_channel",
    "notification_publisher",
    "serialize_notification",
]
