"""Command-line front door for pollwatch.

Parses CLI options on top of persisted settings, registers the tree under
PATH, then polls it and runs an optional command whenever a pass changes.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .folder_model import OsFileSystem, normalize_extension
from .log import setup_logging
from .runtime import PollLoopTiming, WatchSettings, load_watch_settings, run_command, run_poll_loop, save_watch_settings
from .scanner import ScanReport, Scanner
from .watcher import Watcher


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for strictly positive float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _split_command(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split ``argv`` at the first ``--`` into ``(options, command)``."""
    if "--" not in argv:
        return argv, []
    idx = argv.index("--")
    return argv[:idx], argv[idx + 1 :]


def _resolve_ignore(root: Path, raw: str) -> str:
    path = Path(os.path.expanduser(raw))
    if not path.is_absolute():
        path = root / path
    return os.path.normpath(str(path))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pollwatch",
        description="Poll a directory tree and run a command whenever tracked files change.",
        epilog="Everything after -- is the command to run on change.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory to watch. Defaults to current directory.")
    parser.add_argument("--ext", default=None, help="Tracked file extension (default from config, else .go).")
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATH",
        help="Directory to exclude from discovery (repeatable, relative to PATH).",
    )
    parser.add_argument("--interval", type=_positive_float, default=None, help="Seconds between polling passes.")
    parser.add_argument("--max-passes", type=_positive_int, default=None, help="Stop after this many passes.")
    parser.add_argument("--list", action="store_true", help="Print watched folders and exit.")
    parser.add_argument("--save", action="store_true", help="Persist extension, ignores, interval and command.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug).")
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and poll the requested tree.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    options, command = _split_command(sys.argv[1:])
    args = build_parser().parse_args(options)
    setup_logging(args.verbose, args.log_file)

    settings = load_watch_settings()
    try:
        extension = normalize_extension(args.ext) if args.ext is not None else settings.extension
    except ValueError as exc:
        raise SystemExit(f"Invalid extension: {exc}") from exc

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    root = path.resolve()

    effective = WatchSettings(
        extension=extension,
        ignore=tuple(dict.fromkeys([*settings.ignore, *args.ignore])),
        poll_seconds=args.interval if args.interval is not None else settings.poll_seconds,
        command=tuple(command) if command else settings.command,
    )
    if args.save:
        save_watch_settings(effective)

    fs = OsFileSystem()
    watcher = Watcher(fs, extension=effective.extension)
    for raw in effective.ignore:
        watcher.ignore(_resolve_ignore(root, raw))
    watcher.adjust(str(root))

    if args.list:
        for folder in watcher.watched_paths():
            print(folder)
        return

    scanner = Scanner(fs, watcher)

    def on_change(report: ScanReport) -> None:
        print(f"[pollwatch] {report.summary()}", flush=True)
        if effective.command:
            run_command(effective.command, root)

    run_poll_loop(
        scanner,
        str(root),
        on_change,
        timing=PollLoopTiming(poll_seconds=effective.poll_seconds),
        max_passes=args.max_passes,
    )


if __name__ == "__main__":
    main()
