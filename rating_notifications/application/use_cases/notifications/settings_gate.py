"""Per-recipient opt-out filter for notification types."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rating_notifications.domain.entities import NotificationSettings, NotificationType
from rating_notifications.infrastructure.repositories import (
    NotificationSettingsRepository,
)

logger = logging.getLogger(__name__)


class SettingsGate:
    """Own notification settings and answer whether a type is enabled.

    A profile without a settings row is treated as having every notification
    type enabled. The row itself is only created when settings are read or
    updated explicitly.
    """

    def __init__(self, repository: NotificationSettingsRepository) -> None:
        self._repository = repository

    def get_or_create(self, profile_id: str) -> NotificationSettings:
        settings = self._repository.get(profile_id)
        if settings is not None:
            return settings

        self._repository.insert_default_if_missing(profile_id)
        logger.info("Created default notification settings for %s", profile_id)
        settings = self._repository.get(profile_id)
        return settings or NotificationSettings.defaults(profile_id)

    def is_enabled(
        self, profile_id: str, notification_type: NotificationType | str
    ) -> bool:
        settings = self._repository.get(profile_id)
        if settings is None:
            return True
        return settings.is_enabled(notification_type)

    def update(
        self, profile_id: str, flags: Mapping[str, bool | None]
    ) -> NotificationSettings:
        """Apply the supplied ``flags`` and return the full settings record.

        ``None`` values are ignored, unknown flag names raise ``ValueError``.
        """

        known = set(NotificationSettings.flag_names())
        unknown = sorted(set(flags) - known)
        if unknown:
            raise ValueError(f"Unknown notification settings: {', '.join(unknown)}")

        changes = {name: bool(value) for name, value in flags.items() if value is not None}
        current = self.get_or_create(profile_id)
        if not changes:
            return current

        updated = self._repository.update_flags(profile_id, changes)
        return updated or current


__all__ = ["SettingsGate"]
