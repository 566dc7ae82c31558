"""Focus log block embedded in a reminder's notes.

The block is a small plain-text document:

    --- Focus Log ---
    • 2025-01-15: 30m
    • 2025-01-16: 45m
    Total: 1h 15m
    -----------------

    Anything after the footer is the user's own notes.

Parsing never raises. A missing or broken block means "no entries", and an
entry with an unreadable duration counts as zero minutes.
"""

import re
from dataclasses import dataclass, field

HEADER = "--- Focus Log ---"
FOOTER = "-----------------"
TOTAL_PREFIX = "Total:"
BULLET = "•"

_ENTRY_RE = re.compile(rf"^(?:{BULLET}\s*)?(?P<label>.*?)(?::\s*|\s*)(?P<minutes>\d+)m$")


@dataclass
class FocusLogEntry:
    """One logged focus session."""

    label: str
    minutes: int | None
    # Line as written, kept for entries whose duration could not be read
    raw: str | None = field(default=None, compare=False)

    def to_line(self) -> str:
        if self.minutes is None:
            return self.raw if self.raw is not None else f"{BULLET} {self.label}"
        return f"{BULLET} {self.label}: {self.minutes}m"

    @classmethod
    def from_line(cls, line: str) -> "FocusLogEntry":
        """Parse an entry line. Unreadable durations give minutes=None."""
        match = _ENTRY_RE.match(line)
        if match:
            return cls(label=match.group("label"), minutes=int(match.group("minutes")))
        label = line[len(BULLET):].strip() if line.startswith(BULLET) else line
        return cls(label=label, minutes=None, raw=line)


@dataclass
class FocusLog:
    """Parsed focus log plus the user's notes that follow it."""

    entries: list[FocusLogEntry] = field(default_factory=list)
    user_notes: str = ""

    @property
    def total_minutes(self) -> int:
        return sum(e.minutes or 0 for e in self.entries)

    def render(self) -> str:
        """Serialize back to notes text. The total is always recomputed."""
        lines = [HEADER]
        lines.extend(e.to_line() for e in self.entries)
        lines.append(f"{TOTAL_PREFIX} {format_duration(self.total_minutes)}")
        lines.append(FOOTER)
        text = "\n".join(lines)
        if self.user_notes:
            text += "\n\n" + self.user_notes
        return text

    @classmethod
    def parse(cls, notes: str | None) -> "FocusLog":
        """
        Parse notes text.

        Text before the header is not kept; only what follows the footer
        survives as user notes.
        """
        notes = notes or ""
        start = notes.find(HEADER)
        end = notes.find(FOOTER, start + len(HEADER)) if start != -1 else -1
        if start == -1 or end == -1:
            return cls(entries=[], user_notes=notes.strip())

        entries = []
        for raw in notes[start + len(HEADER):end].splitlines():
            line = raw.strip()
            if not line or line.startswith(TOTAL_PREFIX):
                continue
            entries.append(FocusLogEntry.from_line(line))

        return cls(entries=entries, user_notes=notes[end + len(FOOTER):].strip())


def format_duration(minutes: int) -> str:
    """Format minutes as '1h 15m' or '45m'."""
    hours, remaining = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {remaining}m"
    return f"{minutes}m"


def parse_focus_log(notes: str | None) -> tuple[list[FocusLogEntry], str]:
    """Split notes into focus log entries and trailing user text."""
    log = FocusLog.parse(notes)
    return log.entries, log.user_notes


def render_focus_log(entries: list[FocusLogEntry], user_notes: str = "") -> str:
    """Render entries and user text as notes text."""
    return FocusLog(entries=list(entries), user_notes=user_notes).render()


def append_focus_entry(notes: str | None, entry: FocusLogEntry) -> str:
    """Append one entry to the log in notes, creating the block if needed."""
    log = FocusLog.parse(notes)
    log.entries.append(entry)
    return log.render()
