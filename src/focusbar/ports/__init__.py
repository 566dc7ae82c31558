"""Ports - interfaces/protocols for external dependencies."""

from .reminder_store import ReminderStore
from .settings import FocusSettings
from .timer import TimerScheduler

__all__ = [
    "ReminderStore",
    "FocusSettings",
    "TimerScheduler",
]
