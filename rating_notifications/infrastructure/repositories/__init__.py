"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .notification_settings_repository import NotificationSettingsRepository
from .profile_repository import ProfileRepository
from .rating_repository import RatingRepository

__all__ = [
    "NotificationRepository",
    "NotificationSettingsRepository",
    "ProfileRepository",
    "RatingRepository",
]
