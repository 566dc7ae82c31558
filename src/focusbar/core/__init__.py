"""Functional core - pure business logic with no I/O."""

from .reminders import Reminder, sort_reminders, sort_by_priority, filter_incomplete
from .focus_log import (
    FocusLog,
    FocusLogEntry,
    append_focus_entry,
    format_duration,
    parse_focus_log,
    render_focus_log,
)

__all__ = [
    # Reminders
    "Reminder",
    "sort_reminders",
    "sort_by_priority",
    "filter_incomplete",
    # Focus log
    "FocusLog",
    "FocusLogEntry",
    "append_focus_entry",
    "format_duration",
    "parse_focus_log",
    "render_focus_log",
]
