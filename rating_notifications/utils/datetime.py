"""Timestamp conversions between notification entities and storage.

Columns hold naive datetimes in the application timezone; entities and API
payloads carry aware datetimes.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rating_notifications.config import get_settings

_UTC_OFFSET = re.compile(r"^UTC(?P<sign>[+-])(?P<hours>\d{1,2})(?::(?P<minutes>\d{2}))?$")


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Resolve ``APP_TIMEZONE`` (an IANA name or ``UTC+HH[:MM]``), UTC if unknown."""

    name = get_settings().app_timezone.strip().upper() or "UTC"
    offset = _UTC_OFFSET.match(name)
    if offset:
        delta = timedelta(
            hours=int(offset["hours"]), minutes=int(offset["minutes"] or 0)
        )
        return timezone(-delta if offset["sign"] == "-" else delta)
    try:
        return ZoneInfo(get_settings().app_timezone.strip() or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def app_now() -> datetime:
    return datetime.now(tz=get_app_timezone())


def storage_now() -> datetime:
    """Column default for ``created_at``."""

    return to_storage(app_now())


def to_storage(value: datetime) -> datetime:
    """Express ``value`` in the app timezone and strip ``tzinfo``."""

    if value.tzinfo is not None:
        value = value.astimezone(get_app_timezone())
    return value.replace(tzinfo=None)


def from_storage(value: datetime | None) -> datetime | None:
    """Attach the app timezone to a naive column value."""

    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=get_app_timezone())
