"""Orchestrate fan-out, settings, persistence and live delivery."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.orm import Session

from rating_notifications.config import get_settings
from rating_notifications.domain.entities import (
    CommentEvent,
    FanoutCandidate,
    LikeEvent,
    MentionEvent,
    Notification,
    NotificationSettings,
    Profile,
    SocialEvent,
)
from rating_notifications.domain.exceptions import (
    IdentityError,
    NotificationError,
    PartialFanoutFailure,
    RecipientFailure,
)
from rating_notifications.infrastructure.notifications import notification_publisher
from rating_notifications.infrastructure.repositories import (
    NotificationRepository,
    NotificationSettingsRepository,
    ProfileRepository,
    RatingRepository,
)

from .fanout import FanoutEngine
from .settings_gate import SettingsGate

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    def dispatch(self, notification: Notification) -> int: ...


@dataclass
class FanoutReport:
    """Outcome of one social event's fan-out."""

    event: SocialEvent
    created: list[Notification] = field(default_factory=list)
    skipped: list[FanoutCandidate] = field(default_factory=list)
    failures: list[RecipientFailure] = field(default_factory=list)
    delivered: int = 0

    @property
    def partial_failure(self) -> bool:
        return bool(self.failures)

    def raise_for_failures(self) -> None:
        """Raise :class:`PartialFanoutFailure` when any recipient failed."""

        if self.failures:
            raise PartialFanoutFailure(self.failures)


class NotificationService:
    """Entry point for social events and for the viewer-facing read side."""

    def __init__(
        self,
        *,
        notifications: NotificationRepository,
        settings_gate: SettingsGate,
        fanout: FanoutEngine,
        profiles: ProfileRepository,
        publisher: Publisher = notification_publisher,
        page_size: int | None = None,
    ) -> None:
        self._notifications = notifications
        self._settings = settings_gate
        self._fanout = fanout
        self._profiles = profiles
        self._publisher = publisher
        self._page_size = page_size or get_settings().notification_page_size

    @classmethod
    def from_session(
        cls, session: Session, *, publisher: Publisher = notification_publisher
    ) -> "NotificationService":
        """Build a service whose collaborators share ``session``."""

        return cls(
            notifications=NotificationRepository(session),
            settings_gate=SettingsGate(NotificationSettingsRepository(session)),
            fanout=FanoutEngine(RatingRepository(session)),
            profiles=ProfileRepository(session),
            publisher=publisher,
        )

    # -- write side -----------------------------------------------------

    def on_social_event(self, event: SocialEvent) -> FanoutReport:
        """Create and deliver the notifications caused by ``event``.

        Failures never propagate to the action that raised the event. Each
        recipient is handled on its own, so one failing insert does not stop
        the others.
        """

        _require_identity(event.actor_id)
        report = FanoutReport(event=event)
        try:
            candidates = self._fanout.candidates_for(event)
        except NotificationError:
            logger.exception("Could not compute notification recipients for %r", event)
            return report
        if not candidates:
            return report

        actor = self._lookup_actor(event.actor_id)
        for candidate in candidates:
            try:
                if not self._settings.is_enabled(candidate.recipient_id, candidate.type):
                    report.skipped.append(candidate)
                    continue
                saved = self._notifications.insert(
                    Notification(
                        id=None,
                        type=candidate.type,
                        recipient_id=candidate.recipient_id,
                        actor_id=event.actor_id,
                        subject_rating_id=event.rating_id,
                        subject_comment_id=getattr(event, "comment_id", None),
                    )
                )
            except NotificationError as exc:
                logger.exception(
                    "Failed to create %s notification for %s",
                    candidate.type.value,
                    candidate.recipient_id,
                )
                report.failures.append(
                    RecipientFailure(
                        recipient_id=candidate.recipient_id,
                        type=candidate.type.value,
                        reason=str(exc),
                    )
                )
                continue

            saved = dataclasses.replace(saved, actor=actor)
            report.created.append(saved)
            logger.info(
                "Created %s notification %s for %s",
                saved.type.value,
                saved.id,
                saved.recipient_id,
            )
            report.delivered += self._deliver(saved)

        if report.partial_failure:
            logger.warning("%s", PartialFanoutFailure(report.failures))
        return report

    def notify_on_like(self, rating_id: int, actor_id: str) -> FanoutReport:
        return self.on_social_event(LikeEvent(actor_id=actor_id, rating_id=rating_id))

    def notify_on_comment(
        self, rating_id: int, comment_id: str, actor_id: str
    ) -> FanoutReport:
        return self.on_social_event(
            CommentEvent(actor_id=actor_id, rating_id=rating_id, comment_id=comment_id)
        )

    def notify_on_mention(
        self,
        rating_id: int,
        comment_id: str,
        actor_id: str,
        mentioned_ids: Iterable[str],
    ) -> FanoutReport:
        return self.on_social_event(
            MentionEvent(
                actor_id=actor_id,
                rating_id=rating_id,
                comment_id=comment_id,
                mentioned_ids=tuple(mentioned_ids),
            )
        )

    # -- read side ------------------------------------------------------

    def fetch_notifications(
        self, profile_id: str, limit: int | None = None
    ) -> list[Notification]:
        """Return the newest notifications of ``profile_id`` with actors attached."""

        _require_identity(profile_id)
        notifications = self._notifications.list_for_recipient(
            profile_id, limit=limit or self._page_size
        )
        return self._hydrate(notifications)

    def unread_count(self, profile_id: str) -> int:
        _require_identity(profile_id)
        return self._notifications.unread_count(profile_id)

    def mark_as_read(self, profile_id: str, notification_id: str | None = None) -> int:
        """Mark one or all notifications read and return the new unread count."""

        _require_identity(profile_id)
        changed = self._notifications.mark_as_read(profile_id, notification_id)
        logger.debug("Marked %s notification(s) read for %s", changed, profile_id)
        return self._notifications.unread_count(profile_id)

    def fetch_settings(self, profile_id: str) -> NotificationSettings:
        _require_identity(profile_id)
        return self._settings.get_or_create(profile_id)

    def update_settings(
        self, profile_id: str, flags: Mapping[str, bool | None]
    ) -> NotificationSettings:
        _require_identity(profile_id)
        return self._settings.update(profile_id, flags)

    # -- helpers --------------------------------------------------------

    def _lookup_actor(self, actor_id: str) -> Profile | None:
        try:
            return self._profiles.get(actor_id)
        except NotificationError:
            logger.warning("Could not load actor profile %s", actor_id, exc_info=True)
            return None

    def _deliver(self, notification: Notification) -> int:
        try:
            return self._publisher.dispatch(notification)
        except Exception:  # pragma: no cover - the record is stored either way
            logger.exception("Failed to publish notification %s", notification.id)
            return 0

    def _hydrate(self, notifications: Sequence[Notification]) -> list[Notification]:
        if not notifications:
            return []
        actors = self._profiles.get_map_by_ids(n.actor_id for n in notifications)
        return [
            dataclasses.replace(notification, actor=actors.get(notification.actor_id))
            for notification in notifications
        ]


def _require_identity(profile_id: str | None) -> None:
    if not profile_id:
        raise IdentityError("The calling profile could not be resolved")


__all__ = ["FanoutReport", "NotificationService"]
