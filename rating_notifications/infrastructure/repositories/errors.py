"""Translate SQLAlchemy failures into :class:`StorageError`."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rating_notifications.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back ``session`` and raise :class:`StorageError` on database errors."""

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Storage failure while trying to %s: %s", action, exc)
        raise StorageError(f"Failed to {action}") from exc


__all__ = ["storage_errors"]
