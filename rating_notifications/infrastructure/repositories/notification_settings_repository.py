"""Persistence helpers for notification settings."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy import insert as standard_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rating_notifications.domain.entities import NotificationSettings
from rating_notifications.infrastructure.models import NotificationSettingsModel

from .errors import storage_errors

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class NotificationSettingsRepository:
    """Read and write the single settings row each profile owns."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> NotificationSettings | None:
        with storage_errors(self.session, "load notification settings"):
            model = self.session.get(NotificationSettingsModel, profile_id)
        return self._to_entity(model) if model else None

    def insert_default_if_missing(self, profile_id: str) -> None:
        """Create the default row for ``profile_id`` unless one already exists.

        Concurrent callers all succeed and leave exactly one row behind.
        """

        with storage_errors(self.session, "create notification settings"):
            dialect = self.session.get_bind().dialect.name
            insert = _UPSERT_DIALECTS.get(dialect)
            if insert is not None:
                statement = (
                    insert(NotificationSettingsModel)
                    .values(profile_id=profile_id)
                    .on_conflict_do_nothing(index_elements=["profile_id"])
                )
                self.session.execute(statement)
            else:
                try:
                    with self.session.begin_nested():
                        self.session.execute(
                            standard_insert(NotificationSettingsModel).values(
                                profile_id=profile_id
                            )
                        )
                except IntegrityError:
                    logger.debug("Notification settings for %s already exist", profile_id)
            self.session.commit()

    def update_flags(
        self, profile_id: str, flags: Mapping[str, bool]
    ) -> NotificationSettings | None:
        """Overwrite only the supplied ``flags`` and return the resulting row."""

        with storage_errors(self.session, "update notification settings"):
            if flags:
                self.session.query(NotificationSettingsModel).filter(
                    NotificationSettingsModel.profile_id == profile_id
                ).update(
                    {
                        getattr(NotificationSettingsModel, name): bool(value)
                        for name, value in flags.items()
                    },
                    synchronize_session=False,
                )
                self.session.commit()
            self.session.expire_all()
        return self.get(profile_id)

    @staticmethod
    def _to_entity(model: NotificationSettingsModel) -> NotificationSettings:
        return NotificationSettings(
            profile_id=model.profile_id,
            notify_on_like=bool(model.notify_on_like),
            notify_on_comment=bool(model.notify_on_comment),
            notify_on_reply=bool(model.notify_on_reply),
            notify_on_mention=bool(model.notify_on_mention),
        )


__all__ = ["NotificationSettingsRepository"]
