"""JSON file reminder store adapter."""

import json
import logging
from pathlib import Path

from focusbar.core.reminders import Reminder

logger = logging.getLogger(__name__)


class ReminderNotFoundError(KeyError):
    """Raised when a reminder id is not in the store."""

    pass


class JsonReminderStore:
    """
    File-based reminder storage.

    Implements ReminderStore protocol. All reminders live in one JSON list.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse reminders file {self.path}: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Reminders file {self.path} is not a list, ignoring")
            return []
        return data

    def _write(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(records, indent=2, ensure_ascii=False))

    def fetch_all(self) -> list[Reminder]:
        """Fetch all reminders, skipping malformed records."""
        reminders = []
        for item in self._read():
            try:
                reminders.append(Reminder.from_dict(item))
            except (ValueError, KeyError, TypeError) as e:
                logger.debug(f"Skipping malformed reminder: {e}")
                continue
        return reminders

    def get(self, reminder_id: str) -> Reminder:
        """Fetch one reminder by id."""
        for reminder in self.fetch_all():
            if reminder.id == reminder_id:
                return reminder
        raise ReminderNotFoundError(reminder_id)

    def save(self, reminder: Reminder) -> None:
        """Insert or replace a reminder."""
        records = self._read()
        record = reminder.to_dict()
        for i, item in enumerate(records):
            if isinstance(item, dict) and item.get("id") == reminder.id:
                records[i] = record
                break
        else:
            records.append(record)
        self._write(records)

    def remove(self, reminder: Reminder) -> None:
        """Delete a reminder if present."""
        records = [r for r in self._read() if not (isinstance(r, dict) and r.get("id") == reminder.id)]
        self._write(records)
