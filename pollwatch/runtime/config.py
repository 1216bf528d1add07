"""Persistent JSON config helpers.

Stores the tracked extension, ignore paths, poll interval and the command to
run on change. All access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..folder_model import DEFAULT_EXTENSION, normalize_extension

APP_NAME = "pollwatch"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_POLL_SECONDS = 0.5
MIN_POLL_SECONDS = 0.05
MAX_POLL_SECONDS = 3600.0


@dataclass(frozen=True)
class WatchSettings:
    """Effective watch settings after sanitizing persisted values."""

    extension: str = DEFAULT_EXTENSION
    ignore: tuple[str, ...] = ()
    poll_seconds: float = DEFAULT_POLL_SECONDS
    command: tuple[str, ...] = ()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config dir never stops the
    watch loop.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_extension(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_EXTENSION
    try:
        return normalize_extension(value)
    except ValueError:
        return DEFAULT_EXTENSION


def _load_string_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item.strip())


def _load_poll_seconds(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_POLL_SECONDS
    if value <= 0:
        return DEFAULT_POLL_SECONDS
    return max(MIN_POLL_SECONDS, min(MAX_POLL_SECONDS, float(value)))


def load_watch_settings() -> WatchSettings:
    data = load_config()
    return WatchSettings(
        extension=_load_extension(data.get("extension")),
        ignore=_load_string_list(data.get("ignore")),
        poll_seconds=_load_poll_seconds(data.get("poll_seconds")),
        command=_load_string_list(data.get("command")),
    )


def save_watch_settings(settings: WatchSettings) -> None:
    """Merge ``settings`` into the persisted config, keeping unknown keys."""
    data = load_config()
    data["extension"] = settings.extension
    data["ignore"] = list(settings.ignore)
    data["poll_seconds"] = settings.poll_seconds
    data["command"] = list(settings.command)
    save_config(data)
