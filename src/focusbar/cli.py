"""focusbar CLI - reminders ordering and focus timer."""

import asyncio
import json
import logging
import signal
import sys

import click

from .adapters.json_store import JsonReminderStore, ReminderNotFoundError
from .config import load_config
from .core.focus_log import FocusLog, format_duration
from .core.reminders import Reminder, filter_incomplete, sort_reminders
from .focus import FocusStatus, StartFocus
from .runner import Shutdown, create_runner

PRIORITY_MARKERS = {1: "!!!", 5: "!!", 9: "!"}


@click.group()
@click.version_option()
@click.pass_context
def main(ctx):
    """focusbar - Reminders with a focus timer."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, config.log_level, logging.INFO),
    )
    ctx.obj = config


def _get_store(ctx) -> JsonReminderStore:
    return JsonReminderStore(ctx.obj.reminders_path)


def _get_reminder(store: JsonReminderStore, reminder_id: str) -> Reminder:
    try:
        return store.get(reminder_id)
    except ReminderNotFoundError:
        click.echo(f"Error: no reminder with id {reminder_id}", err=True)
        sys.exit(1)


def format_reminder_line(reminder: Reminder) -> str:
    """One display line: check box, priority marker, title, due date."""
    check = "x" if reminder.is_completed else " "
    marker = PRIORITY_MARKERS.get(reminder.priority, "")
    due = ""
    if reminder.due_date:
        fmt = "%Y-%m-%d %H:%M" if reminder.has_due_time else "%Y-%m-%d"
        due = f" (due {reminder.due_date.strftime(fmt)})"
    return f"[{check}] [{marker:3}] {reminder.title}{due}  <{reminder.id}>"


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--all", "show_all", is_flag=True, help="Include completed reminders")
@click.pass_context
def list_reminders(ctx, as_json: bool, show_all: bool):
    """List reminders in display order."""
    reminders = _get_store(ctx).fetch_all()
    if not show_all:
        reminders = filter_incomplete(reminders)
    ordered = sort_reminders(reminders)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in ordered], indent=2, ensure_ascii=False))
        return

    if not ordered:
        click.echo("No reminders.")
        return

    for reminder in ordered:
        click.echo(format_reminder_line(reminder))


@main.command()
@click.argument("reminder_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def log(ctx, reminder_id: str, as_json: bool):
    """Show the focus log recorded on a reminder."""
    reminder = _get_reminder(_get_store(ctx), reminder_id)
    focus_log = FocusLog.parse(reminder.notes)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "entries": [{"date": e.label, "minutes": e.minutes} for e in focus_log.entries],
                    "total_minutes": focus_log.total_minutes,
                },
                indent=2,
            )
        )
        return

    if not focus_log.entries:
        click.echo("No focus sessions logged.")
        return

    for entry in focus_log.entries:
        minutes = f"{entry.minutes}m" if entry.minutes is not None else "?"
        click.echo(f"{entry.label}  {minutes}")
    click.echo(f"Total: {format_duration(focus_log.total_minutes)}")


@main.command()
@click.argument("reminder_id")
@click.pass_context
def complete(ctx, reminder_id: str):
    """Mark a reminder completed."""
    store = _get_store(ctx)
    reminder = _get_reminder(store, reminder_id)
    reminder.is_completed = True
    store.save(reminder)
    click.echo(f"Completed: {reminder.title}")


@main.command()
@click.argument("reminder_id")
@click.pass_context
def focus(ctx, reminder_id: str):
    """Focus on a reminder until Ctrl-C, then log the time."""
    config = ctx.obj
    if not config.focus_timer_enabled:
        click.echo("Error: focus timer is disabled (FOCUS_TIMER_ENABLED=false)", err=True)
        sys.exit(1)

    store = _get_store(ctx)
    reminder = _get_reminder(store, reminder_id)
    click.echo(f"Focusing on: {reminder.title} (Ctrl-C to stop)")
    asyncio.run(_run_focus(store, reminder))

    total = FocusLog.parse(store.get(reminder_id).notes).total_minutes
    click.echo(f"Total focus on this reminder: {format_duration(total)}")


async def _run_focus(store: JsonReminderStore, reminder: Reminder) -> None:
    runner, scheduler = create_runner(store)
    last_shown = {"elapsed": None}

    def show(status: FocusStatus) -> None:
        if not status.is_focusing:
            return
        if status.is_nudging:
            click.echo(f"  >> still focused: {status.elapsed_formatted}")
        elif status.elapsed_formatted != last_shown["elapsed"]:
            click.echo(f"  {status.elapsed_formatted}")
        last_shown["elapsed"] = status.elapsed_formatted

    runner.timer.subscribe(show)
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, runner.post, Shutdown())

    scheduler.start()
    runner.post(StartFocus(reminder))
    try:
        await runner.run()
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        scheduler.shutdown(wait=False)
