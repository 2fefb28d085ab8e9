from __future__ import annotations

import os
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import patch

from devfocus.config import (
    AppConfig,
    get_config,
    get_config_dir,
    resolve_database_url,
    save_config,
)


class TestConfig(unittest.TestCase):
    def setUp(self) -> None:
        tmp = TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.home = Path(tmp.name)
        patcher = patch.dict(os.environ, {"DEVFOCUS_HOME": str(self.home)})
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("DEVFOCUS_DB", None)

    def test_defaults_without_file(self) -> None:
        config = get_config()
        self.assertIsNone(config.database_path)
        self.assertEqual(5.0, config.lock_timeout_seconds)
        self.assertEqual(7 * 24 * 3600, config.max_elapsed_seconds)
        self.assertEqual("WARNING", config.log_level)
        self.assertEqual(self.home, get_config_dir())

    def test_saved_config_is_loaded(self) -> None:
        save_config(AppConfig(max_elapsed_seconds=3600, log_level="INFO"))
        self.assertTrue((self.home / "config.json").exists())
        config = get_config()
        self.assertEqual(3600, config.max_elapsed_seconds)
        self.assertEqual("INFO", config.log_level)

    def test_invalid_file_falls_back_to_defaults(self) -> None:
        (self.home / "config.json").write_text("{not json", encoding="utf-8")
        self.assertEqual(AppConfig(), get_config())
        (self.home / "config.json").write_text('{"max_elapsed_seconds": "soon"}', encoding="utf-8")
        self.assertEqual(AppConfig(), get_config())


class TestResolveDatabaseUrl(unittest.TestCase):
    def setUp(self) -> None:
        tmp = TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.home = Path(tmp.name)
        patcher = patch.dict(os.environ, {"DEVFOCUS_HOME": str(self.home)})
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("DEVFOCUS_DB", None)

    def test_default_file_in_config_dir(self) -> None:
        url = resolve_database_url(AppConfig())
        self.assertEqual(f"sqlite:///{self.home / 'devfocus.db'}", url)

    def test_explicit_value_wins(self) -> None:
        os.environ["DEVFOCUS_DB"] = "/from/env.db"
        config = AppConfig(database_path="/from/config.db")
        self.assertEqual("sqlite://", resolve_database_url(config, "sqlite://"))
        self.assertEqual("sqlite:////from/env.db", resolve_database_url(config))

    def test_config_path_used_without_override(self) -> None:
        config = AppConfig(database_path="/from/config.db")
        self.assertEqual("sqlite:////from/config.db", resolve_database_url(config))


if __name__ == "__main__":
    unittest.main()
