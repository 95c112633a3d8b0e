"""Integration tests for the notification HTTP endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    assert client.get("/notifications/settings").status_code == 401


def test_requests_with_invalid_token_are_rejected(client: TestClient) -> None:
    response = client.get(
        "/notifications/", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


def test_like_flow_from_event_to_mark_all_read(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/social-events/likes", json={"rating_id": 1}, headers=auth_headers("alice")
    )
    assert response.status_code == 202
    assert response.json() == {"created": 1, "skipped": 0, "failed": 0, "delivered": 0}

    listed = client.get("/notifications/", headers=auth_headers("bob"))
    assert listed.status_code == 200
    [notification] = listed.json()
    assert notification["type"] == "like"
    assert notification["actor"]["display_name"] == "Alice"
    assert notification["rating_id"] == 1
    assert notification["comment_id"] is None
    assert notification["is_read"] is False

    count = client.get("/notifications/unread-count", headers=auth_headers("bob"))
    assert count.json() == {"unread_count": 1}

    marked = client.post("/notifications/read", headers=auth_headers("bob"))
    assert marked.status_code == 200
    assert marked.json() == {"unread_count": 0}


def test_comment_event_reaches_owner_and_commenters(
    client: TestClient, auth_headers
) -> None:
    response = client.post(
        "/social-events/comments",
        json={"rating_id": 1, "comment_id": "c-alice"},
        headers=auth_headers("alice"),
    )

    assert response.json()["created"] == 3
    for profile_id, expected_type in (("bob", "comment"), ("carol", "reply"), ("dave", "reply")):
        listed = client.get("/notifications/", headers=auth_headers(profile_id)).json()
        assert [n["type"] for n in listed] == [expected_type]
    assert client.get("/notifications/", headers=auth_headers("alice")).json() == []


def test_mark_single_notification_and_unknown_id(client: TestClient, auth_headers) -> None:
    for _ in range(2):
        client.post(
            "/social-events/likes", json={"rating_id": 1}, headers=auth_headers("alice")
        )
    first = client.get("/notifications/", headers=auth_headers("bob")).json()[0]

    marked = client.post(
        "/notifications/read", json={"id": first["id"]}, headers=auth_headers("bob")
    )
    assert marked.json() == {"unread_count": 1}

    unknown = client.post(
        "/notifications/read", json={"id": "missing"}, headers=auth_headers("bob")
    )
    assert unknown.status_code == 200
    assert unknown.json() == {"unread_count": 1}


def test_settings_default_and_partial_update(client: TestClient, auth_headers) -> None:
    defaults = client.get("/notifications/settings", headers=auth_headers("bob"))
    assert defaults.json() == {
        "notify_on_like": True,
        "notify_on_comment": True,
        "notify_on_reply": True,
        "notify_on_mention": True,
    }

    updated = client.patch(
        "/notifications/settings",
        json={"notify_on_like": False},
        headers=auth_headers("bob"),
    )
    assert updated.status_code == 200
    assert updated.json()["notify_on_like"] is False
    assert updated.json()["notify_on_comment"] is True

    response = client.post(
        "/social-events/likes", json={"rating_id": 1}, headers=auth_headers("alice")
    )
    assert response.json() == {"created": 0, "skipped": 1, "failed": 0, "delivered": 0}


def test_settings_update_rejects_unknown_flags(client: TestClient, auth_headers) -> None:
    response = client.patch(
        "/notifications/settings",
        json={"notify_on_follow": False},
        headers=auth_headers("bob"),
    )

    assert response.status_code == 422


def test_list_limit_is_bounded(client: TestClient, auth_headers) -> None:
    response = client.get("/notifications/?limit=1000", headers=auth_headers("bob"))

    assert response.status_code == 422


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
