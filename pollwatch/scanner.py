"""One polling pass over every watched folder.

``Scanner.scan`` reads each tracked folder, diffs its tracked-extension files
against the stored snapshot, grows or shrinks the watcher's folder set when
subdirectories appear or vanish, and folds everything into one boolean.
Missing folders are evicted; any other read failure keeps the folder and
counts as unchanged for that pass.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .folder_model import FileSystem, WatchedFolder, diff_snapshots, is_missing_error, partition_children
from .log import get_logger
from .watcher import Watcher

_log = get_logger("scanner")


@dataclass
class ScanReport:
    """What one pass observed. Paths are absolute file or folder paths."""

    root: str
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    admitted: list[str] = field(default_factory=list)
    evicted: list[str] = field(default_factory=list)
    baseline: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(
            self.added
            or self.removed
            or self.modified
            or self.admitted
            or self.evicted
            or self.baseline
        )

    def summary(self) -> str:
        parts = [
            f"{label} {len(items)}"
            for label, items in (
                ("added", self.added),
                ("removed", self.removed),
                ("modified", self.modified),
                ("new folders", self.admitted),
                ("gone folders", self.evicted),
                ("baseline folders", self.baseline),
            )
            if items
        ]
        return ", ".join(parts) if parts else "no changes"


class Scanner:
    def __init__(self, fs: FileSystem, watcher: Watcher) -> None:
        self.fs = fs
        self.watcher = watcher
        self.last_report: ScanReport | None = None

    def scan(self, root: str) -> bool:
        """Run one pass over all watched folders; return whether anything changed."""
        report = ScanReport(root=root)
        self.last_report = report

        folders = list(self.watcher.watched_folders().values())
        if not folders:
            _log.debug("Nothing watched under %s", root)
            return False

        changed = False
        for folder in folders:
            if not self.watcher.is_watched(folder.path):
                # Evicted earlier in this pass along with a vanished parent.
                continue
            if self._scan_folder(folder, report):
                changed = True

        if changed:
            _log.debug("Scan of %s: %s", root, report.summary())
        return changed

    def _scan_folder(self, folder: WatchedFolder, report: ScanReport) -> bool:
        try:
            children = self.fs.list_children(folder.path)
        except OSError as exc:
            if is_missing_error(exc):
                report.evicted.extend(self.watcher.evict(folder.path))
                return True
            _log.warning("Cannot list %s, keeping previous state: %s", folder.path, exc)
            report.failed.append(folder.path)
            return False

        changed = False
        if folder.pending:
            folder.pending = False
            report.baseline.append(folder.path)
            changed = True

        files, directories = partition_children(children, self.watcher.extension)
        diff = diff_snapshots(folder.snapshot, files)
        folder.snapshot = files
        if diff.changed:
            report.added.extend(os.path.join(folder.path, name) for name in diff.added)
            report.removed.extend(os.path.join(folder.path, name) for name in diff.removed)
            report.modified.extend(os.path.join(folder.path, name) for name in diff.modified)
            changed = True

        if self._sync_subfolders(folder.path, directories, report):
            changed = True
        return changed

    def _sync_subfolders(self, parent: str, directories: list[str], report: ScanReport) -> bool:
        changed = False
        present = {os.path.join(parent, name) for name in directories}

        for path in sorted(present):
            if self.watcher.is_watched(path) or self.watcher.is_ignored(path):
                continue
            admitted = self.watcher.adjust(path)
            for new_folder in admitted:
                new_folder.pending = False
                report.admitted.append(new_folder.path)
            if admitted:
                changed = True

        for path in self.watcher.subfolders(parent):
            if path not in present:
                report.evicted.extend(self.watcher.evict(path))
                changed = True
        return changed


__all__ = [
    "ScanReport",
    "Scanner",
]
