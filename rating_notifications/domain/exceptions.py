"""Errors raised by the notification subsystem.

Every error inherits from :class:`NotificationError` so callers can catch the
whole family with a single ``except`` clause. A missing settings row or an
unknown notification id is deliberately not represented here: those resolve
to default creation and no-ops respectively.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class NotificationError(Exception):
    """Base exception for the notification subsystem."""


class StorageError(NotificationError):
    """Raised when the backing store is unreachable or rejects a read or write.

    Operations are attempted once; retrying is left to the caller.
    """


class IdentityError(NotificationError, PermissionError):
    """Raised when the calling profile cannot be resolved."""


@dataclass(frozen=True)
class RecipientFailure:
    """Why a single recipient of a fan-out did not get its notification."""

    recipient_id: str
    type: str
    reason: str


class PartialFanoutFailure(NotificationError):
    """One or more recipients of a fan-out could not be notified."""

    def __init__(self, failures: Sequence[RecipientFailure]) -> None:
        self.failures = tuple(failures)
        recipients = ", ".join(failure.recipient_id for failure in self.failures)
        super().__init__(f"Notification fan-out failed for: {recipients}")


__all__ = [
    "IdentityError",
    "NotificationError",
    "PartialFanoutFailure",
    "RecipientFailure",
    "StorageError",
]
