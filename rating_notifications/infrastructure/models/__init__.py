"""ORM models used by the application infrastructure."""

from .profile import ProfileModel
from .rating import RatingCommentModel, RatingModel
from .notification import NotificationModel
from .notification_settings import NotificationSettingsModel

__all__ = [
    "ProfileModel",
    "RatingModel",
    "RatingCommentModel",
    "NotificationModel",
    "NotificationSettingsModel",
]
