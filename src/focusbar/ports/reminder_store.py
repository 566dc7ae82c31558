"""Reminder store interface."""

from typing import Protocol

from focusbar.core.reminders import Reminder


class ReminderStore(Protocol):
    """Interface for the backend that owns and persists reminders."""

    def fetch_all(self) -> list[Reminder]:
        """Fetch all reminders."""
        ...

    def get(self, reminder_id: str) -> Reminder:
        """Fetch the current copy of a reminder. Raises KeyError if missing."""
        ...

    def save(self, reminder: Reminder) -> None:
        """Persist a reminder's current fields."""
        ...

    def remove(self, reminder: Reminder) -> None:
        """Delete a reminder."""
        ...
