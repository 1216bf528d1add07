"""Deterministic in-memory filesystem for scripting watch scenarios.

Paths are POSIX strings. A path whose last component has no extension is a
directory; anything else is a file. Parents are created on demand, so
``create("/outside/new_stuff.go")`` works without creating ``/outside`` first.
"""

from __future__ import annotations

import errno
import os
import posixpath
from dataclasses import dataclass, replace
from datetime import datetime

from .types import FileMetadata

_NS_PER_SECOND = 1_000_000_000
_EPOCH_START_NS = 1_700_000_000 * _NS_PER_SECOND


@dataclass(frozen=True)
class _FakeEntry:
    size: int
    mtime_ns: int
    is_dir: bool


def _normalize(path: str) -> str:
    normalized = posixpath.normpath(path)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def _is_directory_name(path: str) -> bool:
    return posixpath.splitext(posixpath.basename(path))[1] == ""


def _to_mtime_ns(modified: float | int | datetime) -> int:
    if isinstance(modified, datetime):
        return int(modified.timestamp() * _NS_PER_SECOND)
    return int(modified * _NS_PER_SECOND)


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


class FakeFileSystem:
    """``FileSystem`` test double with explicit mutation operations."""

    def __init__(self) -> None:
        self._entries: dict[str, _FakeEntry] = {}
        self._failures: dict[str, OSError] = {}
        self._clock_ns = _EPOCH_START_NS

    def _tick(self) -> int:
        self._clock_ns += _NS_PER_SECOND
        return self._clock_ns

    def _entry(self, path: str) -> _FakeEntry | None:
        if path == "/":
            return _FakeEntry(size=0, mtime_ns=_EPOCH_START_NS, is_dir=True)
        return self._entries.get(path)

    def _subtree(self, path: str) -> list[str]:
        prefix = path.rstrip("/") + "/"
        return [candidate for candidate in self._entries if candidate == path or candidate.startswith(prefix)]

    def _ensure_parents(self, path: str) -> None:
        parent = posixpath.dirname(path)
        missing: list[str] = []
        while parent != "/" and parent not in self._entries:
            missing.append(parent)
            parent = posixpath.dirname(parent)
        entry = self._entry(parent)
        if entry is not None and not entry.is_dir:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), parent)
        for directory in reversed(missing):
            self._entries[directory] = _FakeEntry(size=0, mtime_ns=self._tick(), is_dir=True)

    def exists(self, path: str) -> bool:
        return self._entry(_normalize(path)) is not None

    def create(self, path: str, size: int = 0, modified: float | int | datetime | None = None) -> None:
        """Create (or overwrite) a file or directory at ``path``."""
        path = _normalize(path)
        self._ensure_parents(path)
        mtime_ns = self._tick() if modified is None else _to_mtime_ns(modified)
        self._entries[path] = _FakeEntry(size=int(size), mtime_ns=mtime_ns, is_dir=_is_directory_name(path))

    def modify(self, path: str) -> None:
        """Bump size and modification time of an existing entry."""
        path = _normalize(path)
        entry = self._entries.get(path)
        if entry is None:
            raise _not_found(path)
        self._entries[path] = replace(
            entry,
            size=entry.size + 1,
            mtime_ns=max(entry.mtime_ns, self._clock_ns) + _NS_PER_SECOND,
        )

    def rename(self, old_path: str, new_path: str) -> None:
        """Move an entry, and a directory's whole subtree, to ``new_path``."""
        old_path = _normalize(old_path)
        new_path = _normalize(new_path)
        if old_path not in self._entries:
            raise _not_found(old_path)
        if new_path == old_path:
            return
        if new_path.startswith(old_path.rstrip("/") + "/"):
            raise OSError(errno.EINVAL, os.strerror(errno.EINVAL), new_path)
        self._ensure_parents(new_path)
        for existing in self._subtree(new_path):
            del self._entries[existing]
        for source in sorted(self._subtree(old_path)):
            target = new_path + source[len(old_path):]
            self._entries[target] = self._entries.pop(source)

    def delete(self, path: str) -> None:
        """Remove an entry and everything below it."""
        path = _normalize(path)
        if path not in self._entries:
            raise _not_found(path)
        for existing in self._subtree(path):
            del self._entries[existing]

    def fail(self, path: str, error: OSError) -> None:
        """Make ``list_children(path)`` raise ``error`` until ``recover``."""
        self._failures[_normalize(path)] = error

    def recover(self, path: str) -> None:
        self._failures.pop(_normalize(path), None)

    def list_children(self, path: str) -> list[FileMetadata]:
        path = _normalize(path)
        failure = self._failures.get(path)
        if failure is not None:
            raise failure
        entry = self._entry(path)
        if entry is None:
            raise _not_found(path)
        if not entry.is_dir:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)

        children = [
            FileMetadata(
                name=posixpath.basename(candidate),
                size=child.size,
                mtime_ns=child.mtime_ns,
                is_dir=child.is_dir,
            )
            for candidate, child in self._entries.items()
            if candidate != path and posixpath.dirname(candidate) == path
        ]
        children.sort(key=lambda item: item.name)
        return children


__all__ = ["FakeFileSystem"]
