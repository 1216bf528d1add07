"""Public package surface for pollwatch.

Exports the watcher/scanner core plus ``main`` for programmatic CLI
invocation. Most implementation lives in submodules under ``pollwatch``.
"""

from __future__ import annotations

from .folder_model import FakeFileSystem, FileMetadata, FileSystem, OsFileSystem, WatchedFolder
from .scanner import ScanReport, Scanner
from .watcher import Watcher


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "FakeFileSystem",
    "FileMetadata",
    "FileSystem",
    "OsFileSystem",
    "WatchedFolder",
    "ScanReport",
    "Scanner",
    "Watcher",
    "main",
]
