from .notification import (
    ActorRead,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationSettingsRead,
    NotificationSettingsUpdate,
    UnreadCountRead,
)
from .social_event import (
    CommentEventCreate,
    FanoutReportRead,
    LikeEventCreate,
    MentionEventCreate,
)

__all__ = [
    "ActorRead",
    "CommentEventCreate",
    "FanoutReportRead",
    "LikeEventCreate",
    "MentionEventCreate",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationSettingsRead",
    "NotificationSettingsUpdate",
    "UnreadCountRead",
]
