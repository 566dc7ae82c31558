"""Focus settings interface."""

from typing import Protocol


class FocusSettings(Protocol):
    """Read-only settings the focus timer polls on every tick."""

    @property
    def focus_nudge_interval_minutes(self) -> int:
        """Minutes between nudges. 0 disables nudging."""
        ...
