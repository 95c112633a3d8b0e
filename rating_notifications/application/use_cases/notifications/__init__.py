"""Public helpers for creating, reading and delivering notifications."""

from .fanout import FanoutEngine, SubjectLookup
from .service import FanoutReport, NotificationService
from .settings_gate import SettingsGate

__all__ = [
    "FanoutEngine",
    "FanoutReport",
    "NotificationService",
    "SettingsGate",
    "SubjectLookup",
]
