"""Tests for live notification delivery."""

from datetime import datetime, timezone

import anyio
import pytest

from rating_notifications.domain.entities import Notification, NotificationType, Profile
from rating_notifications.infrastructure.notifications import (
    DeliveryChannel,
    NotificationPublisher,
)

pytestmark = pytest.mark.anyio


async def test_messages_arrive_in_publish_order():
    channel = DeliveryChannel(queue_size=10)

    async with channel.subscribe("bob") as subscription:
        assert channel.publish("bob", {"n": 1}) == 1
        channel.publish("bob", {"n": 2})
        channel.publish("bob", {"n": 3})

        received = [await subscription.get() for _ in range(3)]

    assert [message["n"] for message in received] == [1, 2, 3]


async def test_subscription_is_released_when_the_block_exits():
    channel = DeliveryChannel()

    async with channel.subscribe("bob"):
        assert channel.subscriber_count("bob") == 1

    assert channel.subscriber_count("bob") == 0


async def test_publishing_without_listeners_is_dropped():
    channel = DeliveryChannel()

    assert channel.publish("bob", {"n": 1}) == 0


async def test_channels_are_scoped_per_recipient():
    channel = DeliveryChannel()

    async with channel.subscribe("alice") as alice, channel.subscribe("bob") as bob:
        channel.publish("bob", {"n": 1})

        assert alice.pending() == 0
        assert bob.pending() == 1


async def test_every_session_of_a_recipient_gets_a_copy():
    channel = DeliveryChannel()
    message = {"n": 1}

    async with channel.subscribe("bob") as first, channel.subscribe("bob") as second:
        assert channel.publish("bob", message) == 2
        message["n"] = 2

        assert await first.get() == {"n": 1}
        assert await second.get() == {"n": 1}


async def test_closed_subscription_drops_messages_and_ends_iteration():
    channel = DeliveryChannel()
    subscription = channel.open("bob")
    channel.publish("bob", {"n": 1})

    subscription.close()
    subscription.close()

    assert subscription.closed is True
    assert channel.publish("bob", {"n": 2}) == 0
    assert await subscription.get() is None
    assert [message async for message in subscription] == []


async def test_publish_from_worker_thread_is_delivered():
    channel = DeliveryChannel()

    async with channel.subscribe("bob") as subscription:
        await anyio.to_thread.run_sync(channel.publish, "bob", {"n": 1})

        with anyio.fail_after(1):
            message = await subscription.get()

    assert message == {"n": 1}


async def test_full_queue_drops_newest_message():
    channel = DeliveryChannel(queue_size=1)

    async with channel.subscribe("bob") as subscription:
        channel.publish("bob", {"n": 1})
        channel.publish("bob", {"n": 2})

        assert subscription.pending() == 1
        assert subscription.get_nowait() == {"n": 1}
        assert subscription.get_nowait() is None


async def test_publisher_sends_hydrated_payload():
    channel = DeliveryChannel()
    publisher = NotificationPublisher(channel)
    notification = Notification(
        id="n-1",
        type=NotificationType.REPLY,
        recipient_id="bob",
        actor_id="alice",
        subject_rating_id=1,
        subject_comment_id="c-1",
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        actor=Profile(id="alice", display_name="Alice", avatar_url=None),
    )

    async with channel.subscribe("bob") as subscription:
        assert publisher.dispatch(notification) == 1
        message = await subscription.get()

    assert message == {
        "type": "notification",
        "data": {
            "id": "n-1",
            "type": "reply",
            "actor": {"id": "alice", "display_name": "Alice", "avatar_url": None},
            "rating_id": 1,
            "comment_id": "c-1",
            "is_read": False,
            "created_at": "2024-05-01T12:00:00+00:00",
        },
    }
