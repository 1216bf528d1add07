"""Filesystem capability used by the watcher and scanner.

``list_children`` is the only read the core needs. It raises
``FileNotFoundError`` for a missing path and ``NotADirectoryError`` when the
path is a file. Any other ``OSError``, including one raised while reading a
single child, propagates as a transient failure of the whole listing.
"""

from __future__ import annotations

import os
from typing import Protocol

from .types import FileMetadata


class FileSystem(Protocol):
    """Read-only directory listing source (real or simulated)."""

    def list_children(self, path: str) -> list[FileMetadata]:
        """Return immediate children of ``path`` ordered by name."""
        ...


def is_missing_error(exc: OSError) -> bool:
    """Return whether ``exc`` means the listed path is gone as a directory."""
    return isinstance(exc, (FileNotFoundError, NotADirectoryError))


class OsFileSystem:
    """``FileSystem`` backed by ``os.scandir``.

    Symlinks are never followed, so a symlinked directory shows up as a plain
    entry and discovery cannot loop through it.
    """

    def list_children(self, path: str) -> list[FileMetadata]:
        children: list[FileMetadata] = []
        with os.scandir(path) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    stat = child.stat(follow_symlinks=False)
                except FileNotFoundError:
                    # Removed between scandir and stat.
                    continue
                mtime_ns = int(stat.st_mtime_ns)
                size = 0 if is_dir else int(stat.st_size)

                children.append(
                    FileMetadata(
                        name=child.name,
                        size=size,
                        mtime_ns=mtime_ns,
                        is_dir=is_dir,
                    )
                )

        children.sort(key=lambda item: item.name)
        return children


__all__ = [
    "FileSystem",
    "OsFileSystem",
    "is_missing_error",
]
