"""Social events raised by the rating and comment features."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import NotificationType


@dataclass(frozen=True)
class LikeEvent:
    """``actor_id`` liked the rating ``rating_id``."""

    actor_id: str
    rating_id: int


@dataclass(frozen=True)
class CommentEvent:
    """``actor_id`` posted comment ``comment_id`` on the rating ``rating_id``."""

    actor_id: str
    rating_id: int
    comment_id: str


@dataclass(frozen=True)
class MentionEvent:
    """``actor_id`` mentioned ``mentioned_ids`` inside comment ``comment_id``."""

    actor_id: str
    rating_id: int
    comment_id: str
    mentioned_ids: tuple[str, ...] = field(default_factory=tuple)


SocialEvent = LikeEvent | CommentEvent | MentionEvent


@dataclass(frozen=True)
class FanoutCandidate:
    """A single ``(recipient, type)`` pair proposed for one social event."""

    recipient_id: str
    type: NotificationType


__all__ = [
    "CommentEvent",
    "FanoutCandidate",
    "LikeEvent",
    "MentionEvent",
    "SocialEvent",
]
