"""Pydantic models for social events posted by the rating feature."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LikeEventCreate(BaseModel):
    rating_id: int = Field(..., gt=0)


class CommentEventCreate(BaseModel):
    rating_id: int = Field(..., gt=0)
    comment_id: str = Field(..., min_length=1)


class MentionEventCreate(BaseModel):
    rating_id: int = Field(..., gt=0)
    comment_id: str = Field(..., min_length=1)
    mentioned_ids: list[str] = Field(default_factory=list)


class FanoutReportRead(BaseModel):
    """Summary returned to the caller that raised the event."""

    created: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    delivered: int = Field(..., ge=0)


__all__ = [
    "CommentEventCreate",
    "FanoutReportRead",
    "LikeEventCreate",
    "MentionEventCreate",
]
