from __future__ import annotations

import unittest

from devfocus.domain.category import (
    CategoryExperience,
    gain_xp,
    level_for_xp,
    progress_percent,
    xp_threshold,
)
from devfocus.domain.shared import Err, ErrorKind, Ok
from tests.helpers import NOW


class TestLevelFormula(unittest.TestCase):
    def test_known_levels(self) -> None:
        self.assertEqual(1, level_for_xp(0))
        self.assertEqual(1, level_for_xp(99))
        self.assertEqual(2, level_for_xp(100))
        self.assertEqual(3, level_for_xp(400))
        self.assertEqual(4, level_for_xp(1200))
        self.assertEqual(1, level_for_xp(-50))

    def test_level_lies_between_thresholds(self) -> None:
        for xp in range(0, 20000, 7):
            level = level_for_xp(xp)
            self.assertLessEqual(xp_threshold(level), xp)
            self.assertLess(xp, xp_threshold(level + 1))

    def test_exact_thresholds_reach_the_level(self) -> None:
        for level in range(1, 60):
            self.assertEqual(level, level_for_xp(xp_threshold(level)))
            if level > 1:
                self.assertEqual(level - 1, level_for_xp(xp_threshold(level) - 1))


class TestProgressPercent(unittest.TestCase):
    def test_zero_at_threshold_and_below_hundred_before_next(self) -> None:
        for level in range(1, 30):
            self.assertEqual(0.0, progress_percent(xp_threshold(level), level))
            almost = progress_percent(xp_threshold(level + 1) - 1, level)
            self.assertLess(almost, 100.0)
            self.assertGreaterEqual(almost, 99.0)

    def test_clamped(self) -> None:
        self.assertEqual(100.0, progress_percent(5000, 1))
        self.assertEqual(0.0, progress_percent(-10, 1))

    def test_midway(self) -> None:
        self.assertAlmostEqual(50.0, progress_percent(250, 2))


class TestGainXp(unittest.TestCase):
    def _ledger(self, xp: int = 0) -> CategoryExperience:
        return CategoryExperience(
            id="exp-1",
            category_id="cat-1",
            total_xp=xp,
            level=level_for_xp(xp),
            updated_at="2026-01-01T00:00:00+00:00",
        )

    def test_gain_recomputes_level(self) -> None:
        result = gain_xp(self._ledger(), 1200, NOW)
        self.assertIsInstance(result, Ok)
        self.assertEqual(1200, result.value.total_xp)
        self.assertEqual(4, result.value.level)
        self.assertEqual("2026-03-10T12:00:00+00:00", result.value.updated_at)

    def test_negative_delta_rejected(self) -> None:
        result = gain_xp(self._ledger(300), -1, NOW)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.VALIDATION, result.error.kind)


if __name__ == "__main__":
    unittest.main()
