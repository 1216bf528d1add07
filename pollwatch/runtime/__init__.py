"""Runtime helpers: persisted settings and the polling loop."""

from __future__ import annotations

from .config import WatchSettings, load_watch_settings, save_watch_settings
from .loop import PollLoopTiming, run_command, run_poll_loop

__all__ = [
    "WatchSettings",
    "load_watch_settings",
    "save_watch_settings",
    "PollLoopTiming",
    "run_command",
    "run_poll_loop",
]
