"""Caller-owned polling loop around ``Scanner.scan``.

The scanner itself never sleeps or schedules; this loop owns the cadence and
invokes the downstream action only on passes that report a change.
"""

from __future__ import annotations

import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..log import get_logger
from ..scanner import ScanReport, Scanner

_log = get_logger("runtime.loop")


@dataclass(frozen=True)
class PollLoopTiming:
    """Timing constants controlling the poll loop."""

    poll_seconds: float


def run_poll_loop(
    scanner: Scanner,
    root: str,
    on_change: Callable[[ScanReport], None],
    *,
    timing: PollLoopTiming,
    sleep: Callable[[float], None] = time.sleep,
    monotonic: Callable[[], float] = time.monotonic,
    max_passes: int | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> int:
    """Scan ``root`` repeatedly until stopped; return how many passes changed.

    Each pass is followed by a sleep covering the rest of the poll interval.
    ``KeyboardInterrupt`` ends the loop without propagating.
    """
    passes = 0
    changed_passes = 0
    try:
        while max_passes is None or passes < max_passes:
            if should_stop is not None and should_stop():
                break
            started = monotonic()
            passes += 1
            if scanner.scan(root):
                changed_passes += 1
                report = scanner.last_report
                assert report is not None
                on_change(report)

            if max_passes is not None and passes >= max_passes:
                break
            remaining = timing.poll_seconds - (monotonic() - started)
            if remaining > 0:
                sleep(remaining)
    except KeyboardInterrupt:
        _log.info("Interrupted after %d pass(es)", passes)
    return changed_passes


def run_command(command: Sequence[str], cwd: Path) -> int | None:
    """Run the downstream command; return its exit code or ``None`` if it cannot start."""
    try:
        proc = subprocess.run(list(command), cwd=str(cwd), check=False)
    except OSError as exc:
        _log.error("Cannot run %s: %s", " ".join(command), exc)
        return None
    if proc.returncode != 0:
        _log.info("%s exited with %d", " ".join(command), proc.returncode)
    return proc.returncode
