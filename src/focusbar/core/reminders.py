"""Pure reminder domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

# Priority codes: 1 high, 5 medium, 9 low, 0 unset.
NO_PRIORITY = 0
UNSET_PRIORITY_RANK = 99


@dataclass
class Reminder:
    """A reminder mirrored from the task store."""

    id: str
    title: str = ""
    is_completed: bool = False
    due_date: datetime | None = None
    has_due_time: bool = False
    priority: int = NO_PRIORITY
    creation_date: datetime | None = None
    notes: str | None = None
    list_name: str = ""

    @property
    def normalized_priority(self) -> int:
        """Priority rank for ordering. Unset sorts after low."""
        return UNSET_PRIORITY_RANK if self.priority == NO_PRIORITY else self.priority

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        """Create Reminder from a stored JSON record."""
        due = None
        has_due_time = False
        if data.get("due_date"):
            raw_due = data["due_date"]
            due = datetime.fromisoformat(raw_due)
            has_due_time = "T" in raw_due
        created = None
        if data.get("creation_date"):
            created = datetime.fromisoformat(data["creation_date"])
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            is_completed=bool(data.get("is_completed", False)),
            due_date=due,
            has_due_time=data.get("has_due_time", has_due_time),
            priority=data.get("priority", NO_PRIORITY) or NO_PRIORITY,
            creation_date=created,
            notes=data.get("notes"),
            list_name=data.get("list_name", ""),
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible record."""
        due = None
        if self.due_date:
            due = self.due_date.isoformat() if self.has_due_time else self.due_date.date().isoformat()
        return {
            "id": self.id,
            "title": self.title,
            "is_completed": self.is_completed,
            "due_date": due,
            "has_due_time": self.has_due_time,
            "priority": self.priority,
            "creation_date": self.creation_date.isoformat() if self.creation_date else None,
            "notes": self.notes,
            "list_name": self.list_name,
        }


def _order_key(r: Reminder) -> tuple:
    # Missing values compare equal to each other, so ties fall through to
    # the next key and finally to sorted()'s stability.
    return (
        r.is_completed,
        r.due_date is None,
        r.due_date,
        r.normalized_priority,
        r.creation_date is not None,
        r.creation_date,
    )


def sort_reminders(reminders: list[Reminder]) -> list[Reminder]:
    """
    Sort reminders for display.

    Incomplete first, then earliest due date (dated before undated), then
    priority (1, 5, 9, unset), then oldest creation date (missing = oldest).
    Equal keys keep their input order.

    Pure function - no I/O.
    """
    return sorted(reminders, key=_order_key)


def sort_by_priority(reminders: list[Reminder]) -> list[Reminder]:
    """
    Priority view ordering.

    Uses the same ordering as sort_reminders so both views agree.
    """
    return sort_reminders(reminders)


def filter_incomplete(reminders: list[Reminder]) -> list[Reminder]:
    """Filter to reminders that are not completed."""
    return [r for r in reminders if not r.is_completed]
