"""Tracked-folder set with forward-looking ignore rules.

A ``Watcher`` owns every ``WatchedFolder`` and the ignore set. ``adjust``
discovers directories recursively; the scanner grows and shrinks the set
through ``adjust``, ``admit`` and ``evict`` while it polls.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from types import MappingProxyType

from .folder_model import (
    DEFAULT_EXTENSION,
    FileSystem,
    WatchedFolder,
    is_missing_error,
    normalize_extension,
    partition_children,
)
from .log import get_logger

_log = get_logger("watcher")


def normalize_path(path: str) -> str:
    return os.path.normpath(path)


class Watcher:
    """Owns the watched folders of one or more root trees."""

    def __init__(self, fs: FileSystem, extension: str = DEFAULT_EXTENSION) -> None:
        self.fs = fs
        self.extension = normalize_extension(extension)
        self._folders: dict[str, WatchedFolder] = {}
        self._ignored: set[str] = set()
        self._children: dict[str, set[str]] = {}

    def adjust(self, path: str) -> list[WatchedFolder]:
        """Register ``path`` and every eligible descendant directory.

        Already tracked and ignored directories are skipped without descending
        into them, so repeated calls on an unchanged tree admit nothing.
        Returns the newly admitted folders in discovery order.
        """
        admitted: list[WatchedFolder] = []
        pending = [normalize_path(path)]
        while pending:
            current = pending.pop()
            if current in self._folders or current in self._ignored:
                continue

            try:
                children = self.fs.list_children(current)
            except OSError as exc:
                if is_missing_error(exc):
                    _log.debug("Skipping %s: not a directory", current)
                else:
                    _log.warning("Cannot list %s, not watching it: %s", current, exc)
                continue

            files, directories = partition_children(children, self.extension)
            folder = WatchedFolder(path=current, snapshot=files)
            self.admit(folder)
            admitted.append(folder)
            pending.extend(os.path.join(current, name) for name in reversed(directories))

        if admitted:
            _log.debug("Watching %d new folder(s) under %s", len(admitted), path)
        return admitted

    def ignore(self, path: str) -> None:
        """Exclude ``path`` from future discovery.

        An already tracked folder stays tracked and is still evicted once it
        disappears.
        """
        self._ignored.add(normalize_path(path))

    def is_ignored(self, path: str) -> bool:
        return normalize_path(path) in self._ignored

    def is_watched(self, path: str) -> bool:
        return normalize_path(path) in self._folders

    def watched_folders(self) -> Mapping[str, WatchedFolder]:
        """Return a read-only view of tracked folders keyed by path."""
        return MappingProxyType(self._folders)

    def watched_paths(self) -> list[str]:
        return sorted(self._folders)

    def subfolders(self, path: str) -> list[str]:
        """Return tracked paths whose parent directory is ``path``."""
        parent = normalize_path(path)
        return sorted(self._children.get(parent, ()))

    def admit(self, folder: WatchedFolder) -> None:
        folder.path = normalize_path(folder.path)
        if folder.path in self._folders:
            raise ValueError(f"folder already watched: {folder.path}")
        self._folders[folder.path] = folder
        parent = os.path.dirname(folder.path)
        if parent != folder.path:
            self._children.setdefault(parent, set()).add(folder.path)

    def evict(self, path: str) -> list[str]:
        """Stop watching ``path`` and every tracked folder below it.

        Returns the evicted paths; empty when ``path`` was not tracked.
        """
        root = normalize_path(path)
        evicted: list[str] = []
        pending = [root]
        while pending:
            current = pending.pop()
            if self._folders.pop(current, None) is not None:
                evicted.append(current)
            pending.extend(self._children.pop(current, ()))
        parent = os.path.dirname(root)
        siblings = self._children.get(parent)
        if siblings is not None:
            siblings.discard(root)
            if not siblings:
                del self._children[parent]
        evicted.sort()
        if evicted:
            _log.debug("Stopped watching %s", ", ".join(evicted))
        return evicted


__all__ = [
    "Watcher",
    "normalize_path",
]
