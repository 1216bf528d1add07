"""Snapshot construction and diffing for watched folders."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

from .types import FileMetadata, Snapshot

DEFAULT_EXTENSION = ".go"


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot."""
    stripped = extension.strip().lstrip(".")
    if not stripped:
        raise ValueError("extension must not be empty")
    return "." + stripped


def has_tracked_extension(name: str, extension: str) -> bool:
    """Return whether file ``name`` ends in ``extension`` (case-sensitive)."""
    return os.path.splitext(name)[1] == extension


def partition_children(children: Iterable[FileMetadata], extension: str) -> tuple[Snapshot, list[str]]:
    """Split a listing into ``(tracked_files, directory_names)``.

    Files without the tracked extension are dropped; directories are kept
    whatever their name.
    """
    files: Snapshot = {}
    directories: list[str] = []
    for child in children:
        if child.is_dir:
            directories.append(child.name)
        elif has_tracked_extension(child.name, extension):
            files[child.name] = child
    return files, directories


@dataclass(frozen=True)
class SnapshotDiff:
    """File names added, removed, or modified between two snapshots.

    A rename shows up as one removed plus one added name.
    """

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed or self.modified)


def diff_snapshots(previous: Snapshot, current: Snapshot) -> SnapshotDiff:
    """Compare two snapshots by name, size and modification time."""
    added = tuple(sorted(name for name in current if name not in previous))
    removed = tuple(sorted(name for name in previous if name not in current))
    modified = tuple(
        sorted(
            name
            for name, meta in current.items()
            if name in previous
            and (meta.size != previous[name].size or meta.mtime_ns != previous[name].mtime_ns)
        )
    )
    return SnapshotDiff(added=added, removed=removed, modified=modified)


__all__ = [
    "DEFAULT_EXTENSION",
    "normalize_extension",
    "has_tracked_extension",
    "partition_children",
    "SnapshotDiff",
    "diff_snapshots",
]
