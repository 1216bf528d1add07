"""Logging configuration for pollwatch.

Uses Python's standard logging module with support for:
- Verbosity counts: warning(0), info(1), debug(2+)
- Optional log file with stderr fallback
- Compact ``HH:MM:SS level: message`` lines
"""

from __future__ import annotations

import logging
import os
import sys

logger = logging.getLogger("pollwatch")

_initialized = False

_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
}


class _LowercaseLevelFormatter(logging.Formatter):
    """Formatter that emits lowercase level names."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        return super().format(record)


def level_for_verbosity(verbose: int) -> int:
    return _VERBOSITY_MAP.get(max(0, verbose), logging.DEBUG)


def setup_logging(verbose: int = 0, log_file: str | None = None) -> None:
    """Attach handlers to the ``pollwatch`` logger.

    Call this once at startup; subsequent calls are no-ops. ``log_file``
    falls back to the ``POLLWATCH_LOG`` environment variable.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = level_for_verbosity(verbose)
    logger.setLevel(level)
    formatter = _LowercaseLevelFormatter("%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S")

    log_path = log_file or os.environ.get("POLLWATCH_LOG")
    if log_path:
        log_path = os.path.expanduser(log_path)
        try:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        except OSError as exc:
            print(f"[pollwatch] Failed to open log file: {exc}", file=sys.stderr)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            return

    _add_stderr_handler(formatter, level)


def _add_stderr_handler(formatter: logging.Formatter, level: int) -> None:
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``pollwatch`` logger or one of its children."""
    if name:
        return logger.getChild(name)
    return logger
