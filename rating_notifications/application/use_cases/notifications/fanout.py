"""Decide who gets notified about a social event."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from rating_notifications.domain.entities import (
    CommentEvent,
    FanoutCandidate,
    LikeEvent,
    MentionEvent,
    NotificationType,
    SocialEvent,
)


class SubjectLookup(Protocol):
    """Read access to rating ownership and comment authorship."""

    def owner_of(self, rating_id: int) -> str | None: ...

    def commenter_ids(
        self, rating_id: int, *, exclude_comment_id: str | None = None
    ) -> Sequence[str]: ...


class FanoutEngine:
    """Map one social event to its distinct ``(recipient, type)`` candidates.

    The result depends only on the event and on the current ownership and
    comment authorship of the rating. Notification history is not consulted, so
    repeating an event repeats its candidates.
    """

    def __init__(self, subjects: SubjectLookup) -> None:
        self._subjects = subjects

    def candidates_for(self, event: SocialEvent) -> list[FanoutCandidate]:
        if isinstance(event, LikeEvent):
            return self._for_like(event)
        if isinstance(event, CommentEvent):
            return self._for_comment(event)
        if isinstance(event, MentionEvent):
            return self._for_mention(event)
        raise TypeError(f"Unsupported social event: {type(event).__name__}")

    def _for_like(self, event: LikeEvent) -> list[FanoutCandidate]:
        owner_id = self._subjects.owner_of(event.rating_id)
        candidates: list[FanoutCandidate] = []
        _add_candidate(candidates, owner_id, NotificationType.LIKE, actor_id=event.actor_id)
        return candidates

    def _for_comment(self, event: CommentEvent) -> list[FanoutCandidate]:
        owner_id = self._subjects.owner_of(event.rating_id)
        if owner_id is None:
            return []

        candidates: list[FanoutCandidate] = []
        _add_candidate(
            candidates, owner_id, NotificationType.COMMENT, actor_id=event.actor_id
        )
        commenters = self._subjects.commenter_ids(
            event.rating_id, exclude_comment_id=event.comment_id
        )
        for commenter_id in commenters:
            # The owner was already handled above, even when the owner is the actor.
            if commenter_id == owner_id:
                continue
            _add_candidate(
                candidates, commenter_id, NotificationType.REPLY, actor_id=event.actor_id
            )
        return candidates

    def _for_mention(self, event: MentionEvent) -> list[FanoutCandidate]:
        candidates: list[FanoutCandidate] = []
        for mentioned_id in event.mentioned_ids:
            _add_candidate(
                candidates, mentioned_id, NotificationType.MENTION, actor_id=event.actor_id
            )
        return candidates


def _add_candidate(
    candidates: list[FanoutCandidate],
    recipient_id: str | None,
    notification_type: NotificationType,
    *,
    actor_id: str,
) -> None:
    """Append a candidate unless it targets the actor or an already chosen profile."""

    if not recipient_id or recipient_id == actor_id:
        return
    if any(candidate.recipient_id == recipient_id for candidate in candidates):
        return
    candidates.append(FanoutCandidate(recipient_id=recipient_id, type=notification_type))


__all__ = ["FanoutEngine", "SubjectLookup"]
