"""Tests for the JSON reminder store adapter."""

import json
from datetime import datetime

import pytest

from focusbar.adapters.json_store import JsonReminderStore, ReminderNotFoundError
from focusbar.core.reminders import Reminder


@pytest.fixture
def store(tmp_path):
    return JsonReminderStore(tmp_path / "data" / "reminders.json")


class TestJsonReminderStore:
    def test_missing_file_is_empty(self, store):
        assert store.fetch_all() == []

    def test_save_then_fetch(self, store):
        reminder = Reminder(id="1", title="Pay rent", due_date=datetime(2025, 2, 1), priority=1)
        store.save(reminder)
        assert store.fetch_all() == [reminder]

    def test_save_replaces_existing(self, store):
        store.save(Reminder(id="1", title="Old"))
        store.save(Reminder(id="2", title="Other"))
        store.save(Reminder(id="1", title="New", notes="n"))

        reminders = store.fetch_all()
        assert [r.id for r in reminders] == ["1", "2"]
        assert reminders[0].title == "New"
        assert reminders[0].notes == "n"

    def test_get(self, store):
        store.save(Reminder(id="1", title="Pay rent"))
        assert store.get("1").title == "Pay rent"

    def test_get_missing(self, store):
        with pytest.raises(ReminderNotFoundError):
            store.get("nope")

    def test_remove(self, store):
        first = Reminder(id="1")
        store.save(first)
        store.save(Reminder(id="2"))
        store.remove(first)
        assert [r.id for r in store.fetch_all()] == ["2"]

    def test_corrupt_file_is_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")
        assert store.fetch_all() == []

    def test_skips_malformed_records(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([{"title": "no id"}, {"id": "ok"}, {"id": "bad", "due_date": "soon"}]))
        assert [r.id for r in store.fetch_all()] == ["ok"]

    def test_notes_unicode_preserved(self, store):
        store.save(Reminder(id="1", notes="• 2025-01-15: 30m"))
        assert "• 2025-01-15" in store.path.read_text()
        assert store.get("1").notes == "• 2025-01-15: 30m"
