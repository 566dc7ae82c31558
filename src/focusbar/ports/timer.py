"""Timer scheduling interface."""

from typing import Protocol


class TimerScheduler(Protocol):
    """
    Schedules the focus timer's periodic tick and one-shot nudge clear.

    Implementations deliver Tick(generation) and ClearNudge(generation)
    messages back to the timer's owner rather than calling it directly.
    """

    def start_ticks(self, generation: int, interval: float) -> None:
        """Deliver a Tick every `interval` seconds until cancelled."""
        ...

    def schedule_nudge_clear(self, generation: int, delay: float) -> None:
        """Deliver one ClearNudge after `delay` seconds."""
        ...

    def cancel(self, generation: int) -> None:
        """Stop all pending deliveries for a session generation."""
        ...
