"""Domain datatypes for watched folders and their file snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileMetadata:
    """One directory child as observed by a filesystem listing."""

    name: str
    size: int = 0
    mtime_ns: int = 0
    is_dir: bool = False


Snapshot = dict[str, FileMetadata]


@dataclass
class WatchedFolder:
    """Tracked directory plus the tracked-extension files seen on its last read.

    ``pending`` stays set until a scan pass has reported the folder once.
    """

    path: str
    snapshot: Snapshot = field(default_factory=dict)
    pending: bool = True


__all__ = [
    "FileMetadata",
    "Snapshot",
    "WatchedFolder",
]
