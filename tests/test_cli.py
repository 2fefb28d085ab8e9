from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import patch

from typer.testing import CliRunner

from devfocus import __version__
from devfocus.interfaces.cli import app


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        tmp = TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        patcher = patch.dict(os.environ, {"DEVFOCUS_HOME": str(root / "home")})
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("DEVFOCUS_DB", None)
        self.db = str(root / "devfocus.db")
        self.runner = CliRunner()

    def invoke(self, *args: str):
        return self.runner.invoke(app, [*args, "--db", self.db])

    def invoke_json(self, *args: str):
        result = self.invoke(*args, "--json")
        self.assertEqual(0, result.exit_code, result.output)
        return json.loads(result.stdout)

    def test_version(self) -> None:
        result = self.runner.invoke(app, ["--version"])
        self.assertEqual(0, result.exit_code)
        self.assertIn(f"devfocus version {__version__}", result.output)

    def test_track_and_complete_subtask(self) -> None:
        task = self.invoke_json("task", "create", "Ship login page")
        categories = self.invoke_json("category", "list")
        backend = next(c for c in categories if c["name"] == "backend")
        subtask = self.invoke_json("subtask", "add", task["id"], "Build form", "--category", backend["id"])

        started = self.invoke("start", subtask["id"])
        self.assertEqual(0, started.exit_code, started.output)
        paused = self.invoke("pause", subtask["id"], "300")
        self.assertEqual(0, paused.exit_code, paused.output)
        self.assertIn("0:05:00", paused.output)
        resumed = self.invoke("resume", subtask["id"])
        self.assertEqual(0, resumed.exit_code, resumed.output)

        completion = self.invoke_json("complete", subtask["id"], "1200")
        self.assertEqual(15, completion["points_earned"])
        self.assertEqual(1200, completion["xp_gained"])

        stats = self.invoke_json("category", "stats")
        backend_stats = next(s for s in stats if s["category"]["name"] == "backend")
        self.assertEqual(1200, backend_stats["total_xp"])
        self.assertEqual(4, backend_stats["level"])

        metrics = self.invoke_json("metrics", "task", task["id"])
        self.assertEqual(15, metrics["total_points"])
        general = self.invoke_json("metrics", "general")
        self.assertEqual(7, len(general["points_last_7_days"]))
        profile = self.invoke_json("metrics", "profile")
        self.assertEqual(1200, profile["total_xp"])

    def test_errors_exit_with_status_one(self) -> None:
        result = self.invoke("subtask", "start", "no-such-subtask")
        self.assertEqual(1, result.exit_code)
        self.assertIn("Subtask not found", result.output)

        result = self.invoke("task", "status", "no-such-task", "someday")
        self.assertEqual(1, result.exit_code)
        self.assertIn("Unknown task status", result.output)

    def test_task_list_and_delete(self) -> None:
        task = self.invoke_json("task", "create", "Refactor", "--description", "Split modules")
        listed = self.invoke("task", "list")
        self.assertEqual(0, listed.exit_code, listed.output)
        self.assertIn("Refactor", listed.output)

        deleted = self.invoke("task", "delete", task["id"], "--yes")
        self.assertEqual(0, deleted.exit_code, deleted.output)
        self.assertEqual([], self.invoke_json("task", "list"))


if __name__ == "__main__":
    unittest.main()
