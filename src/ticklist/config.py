"""Configuration management for ticklist."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TICKLIST_HOME = Path(os.environ.get("TICKLIST_HOME", Path.home() / ".ticklist"))
CONFIG_FILE = TICKLIST_HOME / "ticklist.conf"
DATA_FILE = TICKLIST_HOME / "todos.json"
LOG_FILE = TICKLIST_HOME / "ticklist.log"

THEMES = ("modern_dark", "soft_pastel", "cyberpunk")


@dataclass
class Config:
    """ticklist configuration."""

    data_file: Path = field(default_factory=lambda: DATA_FILE)
    theme: str = "modern_dark"
    due_soon_hours: int = 24
    poll_interval_ms: int = 100
    show_details: bool = False
    log_file: Path = field(default_factory=lambda: LOG_FILE)


def _parse_bool(value: str) -> bool | None:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


def _parse_positive_int(key: str, value: str) -> int | None:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Ignoring {key.upper()}: '{value}' is not an integer")
        return None
    if number <= 0:
        logger.warning(f"Ignoring {key.upper()}: must be positive, got {number}")
        return None
    return number


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


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ticklist.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "data_file":
                if value:
                    config.data_file = Path(value).expanduser()
            case "theme":
                if value in THEMES:
                    config.theme = value
                else:
                    logger.warning(f"Unknown THEME '{value}', expected one of {', '.join(THEMES)}")
            case "due_soon_hours":
                hours = _parse_positive_int(key, value)
                if hours is not None:
                    config.due_soon_hours = hours
            case "poll_interval_ms":
                interval = _parse_positive_int(key, value)
                if interval is not None:
                    config.poll_interval_ms = interval
            case "show_details":
                flag = _parse_bool(value)
                if flag is None:
                    logger.warning(f"Ignoring SHOW_DETAILS: '{value}' is not a boolean")
                else:
                    config.show_details = flag
            case "log_file":
                if value:
                    config.log_file = Path(value).expanduser()
            case _:
                logger.debug(f"Unknown config key '{key}'")

    return config
