"""Domain entities exposed by the application."""

from .notification import COMMENT_BEARING_TYPES, Notification, NotificationType
from .notification_settings import SETTING_FLAGS, NotificationSettings
from .profile import Profile
from .social_event import (
    CommentEvent,
    FanoutCandidate,
    LikeEvent,
    MentionEvent,
    SocialEvent,
)

__all__ = [
    "COMMENT_BEARING_TYPES",
    "CommentEvent",
    "FanoutCandidate",
    "LikeEvent",
    "MentionEvent",
    "Notification",
    "NotificationSettings",
    "NotificationType",
    "Profile",
    "SETTING_FLAGS",
    "SocialEvent",
]
