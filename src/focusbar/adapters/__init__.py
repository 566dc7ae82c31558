"""Adapters - I/O implementations of ports."""

from .json_store import JsonReminderStore, ReminderNotFoundError
from .scheduler_timer import SchedulerTimer

__all__ = [
    "JsonReminderStore",
    "ReminderNotFoundError",
    "SchedulerTimer",
]
