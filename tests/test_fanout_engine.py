"""Tests for recipient derivation of social events."""

import pytest

from rating_notifications.application.use_cases.notifications import FanoutEngine
from rating_notifications.domain.entities import (
    CommentEvent,
    FanoutCandidate,
    LikeEvent,
    MentionEvent,
    NotificationType,
)


class FakeSubjects:
    """In-memory ownership and comment authorship."""

    def __init__(self, owners=None, comments=None):
        self.owners = owners or {}
        self.comments = comments or {}

    def owner_of(self, rating_id):
        return self.owners.get(rating_id)

    def commenter_ids(self, rating_id, *, exclude_comment_id=None):
        authors = []
        for comment_id, profile_id in self.comments.get(rating_id, []):
            if comment_id == exclude_comment_id or profile_id in authors:
                continue
            authors.append(profile_id)
        return authors


def _pairs(candidates):
    return [(candidate.recipient_id, candidate.type) for candidate in candidates]


@pytest.fixture()
def engine():
    subjects = FakeSubjects(
        owners={1: "bob", 2: "alice"},
        comments={1: [("c1", "carol"), ("c2", "dave"), ("c3", "carol")]},
    )
    return FanoutEngine(subjects)


def test_like_notifies_rating_owner(engine):
    candidates = engine.candidates_for(LikeEvent(actor_id="alice", rating_id=1))

    assert candidates == [FanoutCandidate("bob", NotificationType.LIKE)]


def test_like_on_own_rating_creates_no_candidate(engine):
    assert engine.candidates_for(LikeEvent(actor_id="bob", rating_id=1)) == []


def test_like_on_unknown_rating_creates_no_candidate(engine):
    assert engine.candidates_for(LikeEvent(actor_id="alice", rating_id=99)) == []


def test_comment_notifies_owner_and_prior_commenters_once(engine):
    event = CommentEvent(actor_id="alice", rating_id=1, comment_id="c9")

    assert _pairs(engine.candidates_for(event)) == [
        ("bob", NotificationType.COMMENT),
        ("carol", NotificationType.REPLY),
        ("dave", NotificationType.REPLY),
    ]


def test_comment_by_prior_commenter_skips_themselves(engine):
    event = CommentEvent(actor_id="carol", rating_id=1, comment_id="c9")

    assert _pairs(engine.candidates_for(event)) == [
        ("bob", NotificationType.COMMENT),
        ("dave", NotificationType.REPLY),
    ]


def test_comment_by_owner_only_notifies_other_commenters(engine):
    event = CommentEvent(actor_id="bob", rating_id=1, comment_id="c9")

    assert _pairs(engine.candidates_for(event)) == [
        ("carol", NotificationType.REPLY),
        ("dave", NotificationType.REPLY),
    ]


def test_owner_who_also_commented_gets_comment_type_only():
    subjects = FakeSubjects(
        owners={1: "bob"},
        comments={1: [("c1", "bob"), ("c2", "carol")]},
    )
    event = CommentEvent(actor_id="alice", rating_id=1, comment_id="c3")

    assert _pairs(FanoutEngine(subjects).candidates_for(event)) == [
        ("bob", NotificationType.COMMENT),
        ("carol", NotificationType.REPLY),
    ]


def test_comment_being_posted_is_not_a_prior_comment():
    subjects = FakeSubjects(owners={1: "bob"}, comments={1: [("new", "erin")]})
    event = CommentEvent(actor_id="alice", rating_id=1, comment_id="new")

    assert _pairs(FanoutEngine(subjects).candidates_for(event)) == [
        ("bob", NotificationType.COMMENT),
    ]


def test_comment_on_unknown_rating_creates_no_candidate(engine):
    event = CommentEvent(actor_id="alice", rating_id=99, comment_id="c9")

    assert engine.candidates_for(event) == []


def test_mention_notifies_each_distinct_profile_except_actor(engine):
    event = MentionEvent(
        actor_id="alice",
        rating_id=1,
        comment_id="c9",
        mentioned_ids=("carol", "alice", "carol", "erin"),
    )

    assert _pairs(engine.candidates_for(event)) == [
        ("carol", NotificationType.MENTION),
        ("erin", NotificationType.MENTION),
    ]


@pytest.mark.parametrize(
    "event",
    [
        LikeEvent(actor_id="alice", rating_id=1),
        CommentEvent(actor_id="alice", rating_id=1, comment_id="c9"),
        MentionEvent(actor_id="alice", rating_id=1, comment_id="c9", mentioned_ids=("bob",)),
    ],
)
def test_actor_is_never_a_candidate_and_recipients_are_unique(engine, event):
    candidates = engine.candidates_for(event)
    recipients = [candidate.recipient_id for candidate in candidates]

    assert "alice" not in recipients
    assert len(recipients) == len(set(recipients))


def test_repeated_events_yield_the_same_candidates(engine):
    event = LikeEvent(actor_id="alice", rating_id=1)

    assert engine.candidates_for(event) == engine.candidates_for(event)


def test_unsupported_event_is_rejected(engine):
    with pytest.raises(TypeError):
        engine.candidates_for(object())
