"""Tests for extension filtering and snapshot diffing."""

from __future__ import annotations

import unittest

from pollwatch.folder_model import (
    FileMetadata,
    diff_snapshots,
    has_tracked_extension,
    normalize_extension,
    partition_children,
)


class ExtensionTests(unittest.TestCase):
    def test_normalize_extension_adds_single_leading_dot(self) -> None:
        self.assertEqual(normalize_extension("go"), ".go")
        self.assertEqual(normalize_extension(".go"), ".go")
        self.assertEqual(normalize_extension("..py "), ".py")

    def test_normalize_extension_rejects_empty(self) -> None:
        with self.assertRaises(ValueError):
            normalize_extension(" . ")

    def test_has_tracked_extension_is_exact_and_case_sensitive(self) -> None:
        self.assertTrue(has_tracked_extension("file.go", ".go"))
        self.assertFalse(has_tracked_extension("file.GO", ".go"))
        self.assertFalse(has_tracked_extension("file.go.orig", ".go"))
        self.assertFalse(has_tracked_extension("file.MISC", ".go"))
        self.assertFalse(has_tracked_extension(".go", ".go"))


class PartitionTests(unittest.TestCase):
    def test_partition_keeps_tracked_files_and_all_directories(self) -> None:
        children = [
            FileMetadata(name="a.go", size=1, mtime_ns=10),
            FileMetadata(name="b.txt", size=2, mtime_ns=10),
            FileMetadata(name="pkg", is_dir=True),
            FileMetadata(name="weird.go", is_dir=True),
        ]

        files, directories = partition_children(children, ".go")

        self.assertEqual(list(files), ["a.go"])
        self.assertEqual(files["a.go"].size, 1)
        self.assertEqual(directories, ["pkg", "weird.go"])


class DiffTests(unittest.TestCase):
    def test_identical_snapshots_do_not_change(self) -> None:
        snapshot = {"a.go": FileMetadata(name="a.go", size=1, mtime_ns=5)}
        diff = diff_snapshots(snapshot, dict(snapshot))
        self.assertFalse(diff.changed)

    def test_diff_classifies_added_removed_and_modified(self) -> None:
        previous = {
            "keep.go": FileMetadata(name="keep.go", size=1, mtime_ns=5),
            "grow.go": FileMetadata(name="grow.go", size=1, mtime_ns=5),
            "touch.go": FileMetadata(name="touch.go", size=1, mtime_ns=5),
            "gone.go": FileMetadata(name="gone.go", size=1, mtime_ns=5),
        }
        current = {
            "keep.go": FileMetadata(name="keep.go", size=1, mtime_ns=5),
            "grow.go": FileMetadata(name="grow.go", size=2, mtime_ns=5),
            "touch.go": FileMetadata(name="touch.go", size=1, mtime_ns=6),
            "new.go": FileMetadata(name="new.go", size=1, mtime_ns=5),
        }

        diff = diff_snapshots(previous, current)

        self.assertTrue(diff.changed)
        self.assertEqual(diff.added, ("new.go",))
        self.assertEqual(diff.removed, ("gone.go",))
        self.assertEqual(diff.modified, ("grow.go", "touch.go"))

    def test_rename_is_a_remove_plus_add(self) -> None:
        previous = {"old.go": FileMetadata(name="old.go", size=3, mtime_ns=7)}
        current = {"new.go": FileMetadata(name="new.go", size=3, mtime_ns=7)}

        diff = diff_snapshots(previous, current)

        self.assertEqual(diff.added, ("new.go",))
        self.assertEqual(diff.removed, ("old.go",))
        self.assertEqual(diff.modified, ())


if __name__ == "__main__":
    unittest.main()
