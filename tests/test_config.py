from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sweem_tui.config import API_URL_ENV, DEFAULT_API_URL, Config


class ConfigTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir, mock.patch.dict(os.environ, {API_URL_ENV: ""}):
            config = Config(Path(tmp_dir) / "config.json")
            self.assertEqual(config.get("api_url"), DEFAULT_API_URL)
            self.assertEqual(config.get_int("page_size", 0), 100)
            self.assertEqual(config.get("auto_center"), "project")
            self.assertFalse((Path(tmp_dir) / "config.json").exists())

    def test_stored_values_override_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir, mock.patch.dict(os.environ, {API_URL_ENV: ""}):
            path = Path(tmp_dir) / "config.json"
            path.write_text(json.dumps({"page_size": 25, "auto_center": "start"}), encoding="utf-8")
            config = Config(path)
            self.assertEqual(config.get_int("page_size", 0), 25)
            self.assertEqual(config.get("auto_center"), "start")
            self.assertEqual(config.get_float("request_timeout", 0.0), 30.0)

    def test_environment_overrides_api_url(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "config.json"
            path.write_text(json.dumps({"api_url": "http://file:1"}), encoding="utf-8")
            with mock.patch.dict(os.environ, {API_URL_ENV: "http://env:2"}):
                self.assertEqual(Config(path).get("api_url"), "http://env:2")

    def test_set_persists_value(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir, mock.patch.dict(os.environ, {API_URL_ENV: ""}):
            path = Path(tmp_dir) / "nested" / "config.json"
            Config(path).set("refresh_interval", 60)
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["refresh_interval"], 60)
            self.assertEqual(Config(path).get_float("refresh_interval", 0.0), 60.0)

    def test_unreadable_file_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir, mock.patch.dict(os.environ, {API_URL_ENV: ""}):
            path = Path(tmp_dir) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("sweem_tui.config", level="WARNING"):
                config = Config(path)
            self.assertEqual(config.get("api_url"), DEFAULT_API_URL)

    def test_bad_numeric_value_uses_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir, mock.patch.dict(os.environ, {API_URL_ENV: ""}):
            path = Path(tmp_dir) / "config.json"
            path.write_text(json.dumps({"page_size": "lots"}), encoding="utf-8")
            self.assertEqual(Config(path).get_int("page_size", 100), 100)


if __name__ == "__main__":
    unittest.main()
