"""Focus session state machine.

One FocusTimer owns at most one session. Timer callbacks never touch it
directly: the TimerScheduler delivers Tick and ClearNudge messages tagged with
the session generation, and the owner feeds them to handle(). A message from a
superseded session is dropped.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .core.focus_log import FocusLogEntry, append_focus_entry, format_duration
from .core.reminders import Reminder
from .ports import FocusSettings, ReminderStore, TimerScheduler

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 1.0
NUDGE_DURATION_SECONDS = 2.0
MIN_LOGGED_SECONDS = 60
LOG_DATE_FORMAT = "%Y-%m-%d"


# ============== Messages ==============


@dataclass(frozen=True)
class StartFocus:
    reminder: Reminder


@dataclass(frozen=True)
class StopFocus:
    pass


@dataclass(frozen=True)
class Tick:
    generation: int


@dataclass(frozen=True)
class ClearNudge:
    generation: int


# ============== State ==============


@dataclass
class FocusSession:
    """The live session. Elapsed time is always derived from started_at."""

    reminder: Reminder
    started_at: datetime
    last_nudge_at: datetime
    generation: int
    elapsed_seconds: int = 0
    is_nudging: bool = False


@dataclass(frozen=True)
class FocusStatus:
    """Snapshot handed to presentation listeners."""

    reminder_id: str | None
    elapsed_seconds: int
    elapsed_formatted: str
    is_nudging: bool

    @property
    def is_focusing(self) -> bool:
        return self.reminder_id is not None


class FocusTimer:
    """
    Single-session focus timer.

    Starting a session stops (and logs) any session already running. Stopping
    a session of at least a minute appends an entry to the reminder's focus
    log and asks the store to save it.
    """

    def __init__(
        self,
        store: ReminderStore,
        settings: FocusSettings,
        timer: TimerScheduler,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.settings = settings
        self.timer = timer
        self.clock = clock
        self._session: FocusSession | None = None
        self._generation = 0
        self._listeners: list[Callable[[FocusStatus], None]] = []

    # ---------- Queries ----------

    @property
    def is_focusing(self) -> bool:
        return self._session is not None

    @property
    def focused_reminder_id(self) -> str | None:
        return self._session.reminder.id if self._session else None

    @property
    def elapsed_seconds(self) -> int:
        return self._session.elapsed_seconds if self._session else 0

    @property
    def is_nudging(self) -> bool:
        return self._session.is_nudging if self._session else False

    @property
    def elapsed_time_formatted(self) -> str:
        return format_duration(self.elapsed_seconds // 60)

    def is_focused(self, reminder_id: str) -> bool:
        """Check if a specific reminder is the one being focused."""
        return self.focused_reminder_id == reminder_id

    def status(self) -> FocusStatus:
        return FocusStatus(
            reminder_id=self.focused_reminder_id,
            elapsed_seconds=self.elapsed_seconds,
            elapsed_formatted=self.elapsed_time_formatted,
            is_nudging=self.is_nudging,
        )

    def subscribe(self, listener: Callable[[FocusStatus], None]) -> None:
        """Register a callback for every observable state change."""
        self._listeners.append(listener)

    # ---------- Transitions ----------

    def handle(self, message) -> None:
        """Apply a message from the owner's queue."""
        match message:
            case StartFocus(reminder=reminder):
                self.start_focus(reminder)
            case StopFocus():
                self.stop_focus()
            case Tick(generation=generation):
                self.tick(generation)
            case ClearNudge(generation=generation):
                self.clear_nudge(generation)
            case _:
                raise TypeError(f"Unknown focus message: {message!r}")

    def start_focus(self, reminder: Reminder) -> None:
        """Start a focus session, stopping any existing one first."""
        if self._session is not None:
            self.stop_focus()

        now = self.clock()
        self._generation += 1
        self._session = FocusSession(
            reminder=reminder,
            started_at=now,
            last_nudge_at=now,
            generation=self._generation,
        )
        self.timer.start_ticks(self._generation, TICK_INTERVAL_SECONDS)
        logger.info(f"Focus started on {reminder.id} (session {self._generation})")
        self._notify()

    def stop_focus(self) -> None:
        """Stop the current session and log it if it lasted a minute or more."""
        session = self._session
        if session is None:
            self._reset()
            return

        duration = (self.clock() - session.started_at).total_seconds()
        if duration >= MIN_LOGGED_SECONDS:
            self._append_focus_log(session.reminder, duration)
        else:
            logger.debug(f"Focus on {session.reminder.id} lasted {duration:.0f}s, not logged")

        self._reset()
        logger.info(f"Focus stopped on {session.reminder.id} after {format_duration(int(duration // 60))}")
        self._notify()

    def release(self, reminder_id: str) -> None:
        """Stop focusing if this reminder was completed or removed."""
        if self.is_focused(reminder_id):
            self.stop_focus()

    def tick(self, generation: int | None = None) -> None:
        """Recompute elapsed time and check whether a nudge is due."""
        session = self._live_session(generation)
        if session is None:
            return

        now = self.clock()
        session.elapsed_seconds = int((now - session.started_at).total_seconds())
        self._check_nudge(session, now)
        self._notify()

    def clear_nudge(self, generation: int | None = None) -> None:
        """End the nudge pulse."""
        session = self._live_session(generation)
        if session is None or not session.is_nudging:
            return
        session.is_nudging = False
        self._notify()

    # ---------- Internals ----------

    def _live_session(self, generation: int | None) -> FocusSession | None:
        session = self._session
        if session is None:
            logger.debug(f"Dropping timer message for session {generation}: idle")
            return None
        if generation is not None and generation != session.generation:
            logger.debug(f"Dropping stale timer message for session {generation}")
            return None
        return session

    def _check_nudge(self, session: FocusSession, now: datetime) -> None:
        interval = self.settings.focus_nudge_interval_minutes
        if interval <= 0:
            return
        if (now - session.last_nudge_at).total_seconds() >= interval * 60:
            session.is_nudging = True
            session.last_nudge_at = now
            self.timer.schedule_nudge_clear(session.generation, NUDGE_DURATION_SECONDS)
            logger.info(f"Nudge for {session.reminder.id} after {self.elapsed_time_formatted}")

    def _append_focus_log(self, focused: Reminder, duration: float) -> None:
        entry = FocusLogEntry(
            label=self.clock().strftime(LOG_DATE_FORMAT),
            minutes=int(duration // 60),
        )
        # Re-read so edits saved elsewhere during the session are kept
        try:
            reminder = self.store.get(focused.id)
        except KeyError:
            logger.warning(f"Reminder {focused.id} no longer exists, focus log not written")
            return
        except Exception as e:
            logger.error(f"Failed to load {focused.id} for focus log: {e}")
            return
        reminder.notes = append_focus_entry(reminder.notes, entry)
        try:
            self.store.save(reminder)
        except Exception as e:
            logger.error(f"Failed to save focus log for {reminder.id}: {e}")
            return
        logger.info(f"Logged {entry.minutes}m of focus on {reminder.id}")

    def _reset(self) -> None:
        if self._session is not None:
            self.timer.cancel(self._session.generation)
        self._session = None

    def _notify(self) -> None:
        status = self.status()
        for listener in self._listeners:
            listener(status)
