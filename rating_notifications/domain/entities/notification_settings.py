"""Domain entity holding per-profile notification preferences."""

from __future__ import annotations

from dataclasses import dataclass, fields

from .notification import NotificationType

SETTING_FLAGS: dict[NotificationType, str] = {
    NotificationType.LIKE: "notify_on_like",
    NotificationType.COMMENT: "notify_on_comment",
    NotificationType.REPLY: "notify_on_reply",
    NotificationType.MENTION: "notify_on_mention",
}


@dataclass
class NotificationSettings:
    """Opt-out switches for each notification type. Every flag defaults to on."""

    profile_id: str
    notify_on_like: bool = True
    notify_on_comment: bool = True
    notify_on_reply: bool = True
    notify_on_mention: bool = True

    @classmethod
    def defaults(cls, profile_id: str) -> "NotificationSettings":
        """Return the settings a profile gets before changing anything."""

        return cls(profile_id=profile_id)

    @classmethod
    def flag_names(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls) if field.name != "profile_id")

    def is_enabled(self, notification_type: NotificationType | str) -> bool:
        """Return whether notifications of ``notification_type`` should be created."""

        return bool(getattr(self, SETTING_FLAGS[NotificationType(notification_type)]))


__all__ = ["NotificationSettings", "SETTING_FLAGS"]
