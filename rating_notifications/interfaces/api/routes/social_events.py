"""Intake of social events raised by the rating and comment features.

The acting profile is always the authenticated caller. Responses are 202
regardless of how the fan-out went; notification problems never fail the
like or comment that triggered them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from rating_notifications.application.use_cases.notifications import (
    FanoutReport,
    NotificationService,
)
from rating_notifications.interfaces.api.dependencies import (
    get_current_profile_id,
    get_notification_service,
)
from rating_notifications.interfaces.api.schemas import (
    CommentEventCreate,
    FanoutReportRead,
    LikeEventCreate,
    MentionEventCreate,
)

router = APIRouter(prefix="/social-events", tags=["social-events"])


def _report_to_schema(report: FanoutReport) -> FanoutReportRead:
    return FanoutReportRead(
        created=len(report.created),
        skipped=len(report.skipped),
        failed=len(report.failures),
        delivered=report.delivered,
    )


@router.post(
    "/likes", response_model=FanoutReportRead, status_code=status.HTTP_202_ACCEPTED
)
def post_like_event(
    payload: LikeEventCreate,
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> FanoutReportRead:
    return _report_to_schema(service.notify_on_like(payload.rating_id, profile_id))


@router.post(
    "/comments", response_model=FanoutReportRead, status_code=status.HTTP_202_ACCEPTED
)
def post_comment_event(
    payload: CommentEventCreate,
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> FanoutReportRead:
    report = service.notify_on_comment(payload.rating_id, payload.comment_id, profile_id)
    return _report_to_schema(report)


@router.post(
    "/mentions", response_model=FanoutReportRead, status_code=status.HTTP_202_ACCEPTED
)
def post_mention_event(
    payload: MentionEventCreate,
    profile_id: str = Depends(get_current_profile_id),
    service: NotificationService = Depends(get_notification_service),
) -> FanoutReportRead:
    report = service.notify_on_mention(
        payload.rating_id, payload.comment_id, profile_id, payload.mentioned_ids
    )
    return _report_to_schema(report)
