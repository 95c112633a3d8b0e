"""Endpoints and websocket handler for profile notifications."""

from __future__ import annotations

import logging
from typing import Any

import anyio
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import sessionmaker

from rating_notifications.application.use_cases.notifications import NotificationService
from rating_notifications.config import get_settings
from rating_notifications.domain.entities import Notification, NotificationSettings
from rating_notifications.domain.exceptions import IdentityError, NotificationError
from rating_notifications.infrastructure.database import get_session_factory
from rating_notifications.infrastructure.notifications import (
    Subscription,
    delivery_channel,
    serialize_notification,
)
from rating_notifications.interfaces.api.dependencies import (
    get_current_profile_id,
    get_notification_service,
    resolve_profile_id,
)
from rating_notifications.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationSettingsRead,
    NotificationSettingsUpdate,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)

_MAX_PAGE_SIZE = get_settings().notification_max_page_size


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(**serialize_notification(notification))


def _settings_to_schema(settings: NotificationSettings) -> NotificationSettingsRead:
    return NotificationSettingsRead(
        notify_on_like=settings.notify_on_like,
        notify_on_comment=settings.notify_on_comment,
        notify_on_reply=settings.notify_on_reply,
        notify_on_mention=settings.notify_on_mention,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int | None = Query(default=None, ge=1, le=_MAX_PAGE_SIZE),
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated profile."""

    notifications = service.fetch_notifications(profile_id, limit)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=service.unread_count(profile_id))


@router.post("/read", response_model=UnreadCountRead)
def mark_notifications_read(
    payload: NotificationMarkReadRequest | None = None,
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountRead:
    """Mark one notification read, or every unread one when no id is sent."""

    notification_id = payload.id if payload else None
    remaining = service.mark_as_read(profile_id, notification_id)
    return UnreadCountRead(unread_count=remaining)


@router.get("/settings", response_model=NotificationSettingsRead)
def get_notification_settings(
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationSettingsRead:
    return _settings_to_schema(service.fetch_settings(profile_id))


@router.patch("/settings", response_model=NotificationSettingsRead)
def update_notification_settings(
    payload: NotificationSettingsUpdate,
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationSettingsRead:
    settings = service.update_settings(
        profile_id, payload.model_dump(exclude_unset=True)
    )
    return _settings_to_schema(settings)


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> None:
    """Stream notifications created for the authenticated profile.

    The subscription is opened before the catch-up snapshot is read, so a
    notification created in between may appear in both. Clients dedupe by id.
    Database sessions are opened per snapshot and per ack and never held while
    the socket idles.
    """

    try:
        profile_id = resolve_profile_id(websocket.query_params.get("token"))
    except IdentityError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    async with delivery_channel.subscribe(profile_id) as subscription:
        try:
            snapshot = await anyio.to_thread.run_sync(
                _snapshot, session_factory, profile_id
            )
        except NotificationError:
            logger.exception("Could not load catch-up notifications for %s", profile_id)
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
            return
        await websocket.send_json({"type": "init", "data": snapshot})

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(_forward, websocket, subscription)
            await _receive(websocket, session_factory, profile_id)
            task_group.cancel_scope.cancel()


def _snapshot(session_factory: sessionmaker, profile_id: str) -> dict[str, Any]:
    session = session_factory()
    try:
        service = NotificationService.from_session(session)
        notifications = service.fetch_notifications(profile_id)
        return {
            "notifications": [serialize_notification(n) for n in notifications],
            "unread_count": service.unread_count(profile_id),
        }
    finally:
        session.close()


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    async for message in subscription:
        try:
            await websocket.send_json(message)
        except Exception:  # pragma: no cover - socket already gone
            logger.debug("Stopped forwarding to %s", subscription.recipient_id)
            return


async def _receive(
    websocket: WebSocket, session_factory: sessionmaker, profile_id: str
) -> None:
    while True:
        try:
            message = await websocket.receive_json()
        except WebSocketDisconnect:
            return
        except (KeyError, TypeError, ValueError):
            # Binary or malformed frames are ignored.
            logger.debug("Ignoring unreadable websocket frame from %s", profile_id)
            continue

        if not isinstance(message, dict):
            continue

        message_type = message.get("type")
        if message_type == "ping":
            await websocket.send_json({"type": "pong"})
            continue

        if message_type == "ack":
            ids = message.get("ids", [])
            if not isinstance(ids, list) or not ids:
                continue
            try:
                remaining = await anyio.to_thread.run_sync(
                    _acknowledge, session_factory, profile_id, ids
                )
            except NotificationError:
                logger.warning("Could not acknowledge notifications for %s", profile_id)
                continue
            await websocket.send_json(
                {"type": "unread_count", "data": {"unread_count": remaining}}
            )


def _acknowledge(
    session_factory: sessionmaker, profile_id: str, ids: list[Any]
) -> int:
    session = session_factory()
    try:
        service = NotificationService.from_session(session)
        remaining = None
        for notification_id in ids:
            if isinstance(notification_id, str) and notification_id:
                remaining = service.mark_as_read(profile_id, notification_id)
        return service.unread_count(profile_id) if remaining is None else remaining
    finally:
        session.close()
