"""Configuration management for focusbar."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FOCUSBAR_HOME = Path(os.environ.get("FOCUSBAR_HOME", Path.home() / "focusbar"))
CONFIG_FILE = FOCUSBAR_HOME / "config" / "focusbar.conf"
DATA_DIR = FOCUSBAR_HOME / "data"

DEFAULT_NUDGE_INTERVAL_MINUTES = 25


@dataclass
class Config:
    """focusbar configuration."""

    focus_timer_enabled: bool = True
    focus_nudge_interval_minutes: int = DEFAULT_NUDGE_INTERVAL_MINUTES
    reminders_file: str = ""
    log_level: str = "INFO"

    @property
    def reminders_path(self) -> Path:
        if self.reminders_file:
            return Path(self.reminders_file).expanduser()
        return DATA_DIR / "reminders.json"


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from focusbar.conf file."""
    config_file = config_file or CONFIG_FILE
    config = Config()

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "focus_timer_enabled":
                config.focus_timer_enabled = _parse_bool(value)
            case "focus_nudge_interval_minutes":
                try:
                    minutes = int(value)
                except ValueError:
                    minutes = -1
                if minutes < 0:
                    logger.warning(f"Invalid FOCUS_NUDGE_INTERVAL_MINUTES: {value!r}, using default")
                    minutes = DEFAULT_NUDGE_INTERVAL_MINUTES
                config.focus_nudge_interval_minutes = minutes
            case "reminders_file":
                config.reminders_file = value
            case "log_level":
                config.log_level = value.upper()

    return config


class LiveSettings:
    """
    Focus settings read fresh from the config file on every access.

    Implements FocusSettings protocol, so edits to focusbar.conf apply to a
    running session on its next tick.
    """

    def __init__(self, config_file: Path | None = None):
        self.config_file = config_file

    @property
    def focus_nudge_interval_minutes(self) -> int:
        return load_config(self.config_file).focus_nudge_interval_minutes
