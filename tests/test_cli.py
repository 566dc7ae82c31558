"""Tests for the focusbar CLI."""

import json
from datetime import datetime
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from focusbar.adapters.json_store import JsonReminderStore
from focusbar.cli import format_reminder_line, main
from focusbar.config import Config
from focusbar.core.reminders import Reminder


@pytest.fixture
def config(tmp_path):
    return Config(reminders_file=str(tmp_path / "reminders.json"))


@pytest.fixture
def store(config):
    store = JsonReminderStore(config.reminders_path)
    store.save(Reminder(id="late", title="Later thing", due_date=datetime(2025, 1, 20)))
    store.save(Reminder(id="soon", title="Soon thing", due_date=datetime(2025, 1, 16), priority=1))
    store.save(Reminder(id="done", title="Done thing", is_completed=True))
    store.save(
        Reminder(
            id="logged",
            title="Logged thing",
            notes="--- Focus Log ---\n• 2025-01-15: 50m\nTotal: 50m\n-----------------\n\nnotes",
        )
    )
    return store


@pytest.fixture
def invoke(config, store):
    def _invoke(*args):
        with patch("focusbar.cli.load_config", return_value=config):
            return CliRunner().invoke(main, list(args))

    return _invoke


class TestList:
    def test_ordered_incomplete(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert [line.split("<")[-1].rstrip(">") for line in lines] == ["soon", "late", "logged"]

    def test_all_includes_completed(self, invoke):
        result = invoke("list", "--all")
        assert "Done thing" in result.output

    def test_json(self, invoke):
        result = invoke("list", "--json")
        data = json.loads(result.output)
        assert [d["id"] for d in data] == ["soon", "late", "logged"]


class TestLog:
    def test_shows_entries_and_total(self, invoke):
        result = invoke("log", "logged")
        assert result.exit_code == 0
        assert "2025-01-15  50m" in result.output
        assert "Total: 50m" in result.output

    def test_json(self, invoke):
        result = invoke("log", "logged", "--json")
        assert json.loads(result.output) == {
            "entries": [{"date": "2025-01-15", "minutes": 50}],
            "total_minutes": 50,
        }

    def test_no_log(self, invoke):
        result = invoke("log", "late")
        assert "No focus sessions logged." in result.output

    def test_missing_reminder(self, invoke):
        result = invoke("log", "nope")
        assert result.exit_code == 1


class TestComplete:
    def test_marks_completed(self, invoke, store):
        result = invoke("complete", "late")
        assert result.exit_code == 0
        assert store.get("late").is_completed is True


class TestFocus:
    def test_refuses_when_disabled(self, config, store):
        config.focus_timer_enabled = False
        with patch("focusbar.cli.load_config", return_value=config):
            result = CliRunner().invoke(main, ["focus", "late"])
        assert result.exit_code == 1
        assert "disabled" in result.output


class TestFormatReminderLine:
    def test_priority_and_due_time(self):
        reminder = Reminder(
            id="x", title="Call", priority=1, due_date=datetime(2025, 1, 15, 14, 30), has_due_time=True
        )
        assert format_reminder_line(reminder) == "[ ] [!!!] Call (due 2025-01-15 14:30)  <x>"

    def test_completed_no_priority(self):
        reminder = Reminder(id="x", title="Done", is_completed=True)
        assert format_reminder_line(reminder) == "[x] [   ] Done  <x>"
