"""Utility helpers for reusable functionality."""

from .datetime import app_now, from_storage, get_app_timezone, storage_now, to_storage
from .log import configure_logging

__all__ = [
    "app_now",
    "configure_logging",
    "from_storage",
    "get_app_timezone",
    "storage_now",
    "to_storage",
]
