"""Tests for persisted watch settings and input sanitization."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pollwatch.runtime import config


class WatchSettingsTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_watch_settings(), config.WatchSettings())

    def test_malformed_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_settings_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            expected = config.WatchSettings(
                extension=".py",
                ignore=("build", "/abs/vendor"),
                poll_seconds=2.5,
                command=("make", "test"),
            )
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                config.save_watch_settings(expected)
                self.assertEqual(config.load_watch_settings(), expected)

    def test_save_keeps_unknown_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"theme": "dark"}', encoding="utf-8")
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                config.save_watch_settings(config.WatchSettings())
            saved = json.loads(config_path.read_text(encoding="utf-8"))
            self.assertEqual(saved["theme"], "dark")
            self.assertEqual(saved["extension"], ".go")

    def test_load_sanitizes_invalid_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "extension": "py",
                        "ignore": ["ok", 3, "", None],
                        "poll_seconds": 0.001,
                        "command": "make test",
                    }
                )
                loaded = config.load_watch_settings()

            self.assertEqual(loaded.extension, ".py")
            self.assertEqual(loaded.ignore, ("ok",))
            self.assertEqual(loaded.poll_seconds, config.MIN_POLL_SECONDS)
            self.assertEqual(loaded.command, ())

    def test_non_positive_or_boolean_interval_falls_back_to_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", config_path):
                for value in (-1, 0, True, "fast"):
                    config.save_config({"poll_seconds": value, "extension": "."})
                    loaded = config.load_watch_settings()
                    self.assertEqual(loaded.poll_seconds, config.DEFAULT_POLL_SECONDS)
                    self.assertEqual(loaded.extension, ".go")

    def test_save_config_ignores_write_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("pollwatch.runtime.config.CONFIG_PATH", blocker / "config.json"):
                config.save_config({"extension": ".go"})


if __name__ == "__main__":
    unittest.main()
