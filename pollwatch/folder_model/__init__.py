"""Domain model for watched folders and their file snapshots.

This package contains the non-stateful primitives:
- file metadata and watched-folder datatypes
- the filesystem capability plus real and in-memory implementations
- snapshot building and diffing helpers
"""

from __future__ import annotations

from .types import FileMetadata, Snapshot, WatchedFolder
from .fs import FileSystem, OsFileSystem, is_missing_error
from .fake_fs import FakeFileSystem
from .snapshot import (
    DEFAULT_EXTENSION,
    SnapshotDiff,
    diff_snapshots,
    has_tracked_extension,
    normalize_extension,
    partition_children,
)

__all__ = [
    "FileMetadata",
    "Snapshot",
    "WatchedFolder",
    "FileSystem",
    "OsFileSystem",
    "is_missing_error",
    "FakeFileSystem",
    "DEFAULT_EXTENSION",
    "SnapshotDiff",
    "diff_snapshots",
    "has_tracked_extension",
    "normalize_extension",
    "partition_children",
]
