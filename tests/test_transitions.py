from __future__ import annotations

from datetime import timedelta
import unittest

from devfocus.domain.session import (
    TimeSession,
    checkpoint_session,
    complete_session,
    current_session_elapsed,
    historical_total,
    pause_session,
    resume_session,
    start_session,
    validate_elapsed,
)
from devfocus.domain.shared import Err, ErrorKind, Ok, is_err, is_ok, to_timestamp
from devfocus.domain.task import SubtaskStatus
from tests.helpers import NOW, make_subtask


def _session(duration: int = 0, ended: bool = False) -> TimeSession:
    return TimeSession(
        id="session-1",
        subtask_id="sub-1",
        started_at=to_timestamp(NOW),
        ended_at=to_timestamp(NOW) if ended else None,
        duration_seconds=duration,
    )


class TestStart(unittest.TestCase):
    def test_start_from_todo_opens_session(self) -> None:
        result = start_session(make_subtask(), None, NOW)
        self.assertIsInstance(result, Ok)
        subtask, session, event = result.value
        self.assertEqual(SubtaskStatus.IN_PROGRESS, subtask.status)
        self.assertEqual(0, session.duration_seconds)
        self.assertIsNone(session.ended_at)
        self.assertEqual(to_timestamp(NOW), session.started_at)
        self.assertEqual(session.id, event.session_id)

    def test_start_with_active_session_is_conflict(self) -> None:
        result = start_session(make_subtask(), _session(), NOW)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.CONFLICT, result.error.kind)

    def test_only_todo_can_start(self) -> None:
        for status in (SubtaskStatus.IN_PROGRESS, SubtaskStatus.PAUSED, SubtaskStatus.DONE):
            result = start_session(make_subtask(status=status), None, NOW)
            self.assertIsInstance(result, Err, status)
            self.assertEqual(ErrorKind.CONFLICT, result.error.kind)


class TestPauseResume(unittest.TestCase):
    def test_pause_records_elapsed(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS)
        result = pause_session(subtask, _session(), 300, NOW)
        self.assertIsInstance(result, Ok)
        paused, session, event = result.value
        self.assertEqual(SubtaskStatus.PAUSED, paused.status)
        self.assertEqual(300, session.duration_seconds)
        self.assertEqual(to_timestamp(NOW), session.paused_at)
        self.assertEqual(300, event.duration_seconds)

    def test_pause_requires_in_progress(self) -> None:
        for status in (SubtaskStatus.TODO, SubtaskStatus.PAUSED, SubtaskStatus.DONE):
            result = pause_session(make_subtask(status=status), _session(), 10, NOW)
            self.assertEqual(ErrorKind.CONFLICT, result.error.kind)

    def test_pause_without_active_session_is_conflict(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS)
        self.assertEqual(ErrorKind.CONFLICT, pause_session(subtask, None, 10, NOW).error.kind)
        ended = pause_session(subtask, _session(ended=True), 10, NOW)
        self.assertEqual(ErrorKind.CONFLICT, ended.error.kind)

    def test_pause_rejects_decreasing_elapsed(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS)
        result = pause_session(subtask, _session(duration=500), 499, NOW)
        self.assertEqual(ErrorKind.VALIDATION, result.error.kind)

    def test_resume_keeps_duration(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.PAUSED)
        later = NOW + timedelta(minutes=5)
        result = resume_session(subtask, _session(duration=300), later)
        self.assertIsInstance(result, Ok)
        resumed, session, _ = result.value
        self.assertEqual(SubtaskStatus.IN_PROGRESS, resumed.status)
        self.assertEqual(300, session.duration_seconds)
        self.assertEqual(to_timestamp(later), session.resumed_at)

    def test_resume_requires_paused(self) -> None:
        for status in (SubtaskStatus.TODO, SubtaskStatus.IN_PROGRESS, SubtaskStatus.DONE):
            result = resume_session(make_subtask(status=status), _session(), NOW)
            self.assertEqual(ErrorKind.CONFLICT, result.error.kind)


class TestComplete(unittest.TestCase):
    def test_complete_closes_session_and_scores(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS, category_id="cat-1")
        result = complete_session(subtask, _session(duration=100), 1200, NOW)
        self.assertIsInstance(result, Ok)
        done, session, event = result.value
        self.assertEqual(SubtaskStatus.DONE, done.status)
        self.assertEqual(to_timestamp(NOW), done.completed_at)
        self.assertEqual(1200, done.total_time_seconds)
        self.assertEqual(to_timestamp(NOW), session.ended_at)
        self.assertEqual(1200, session.duration_seconds)
        self.assertEqual(15, event.points)
        self.assertEqual(1200, event.xp)
        self.assertEqual("cat-1", event.category_id)

    def test_complete_from_paused(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.PAUSED)
        result = complete_session(subtask, _session(duration=1600), 1600, NOW)
        self.assertIsInstance(result, Ok)
        self.assertEqual(10, result.value[2].points)
        self.assertEqual(0, result.value[2].xp)

    def test_done_is_terminal(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.DONE)
        self.assertEqual(ErrorKind.CONFLICT, complete_session(subtask, _session(), 10, NOW).error.kind)

    def test_todo_cannot_complete(self) -> None:
        result = complete_session(make_subtask(), _session(), 10, NOW)
        self.assertEqual(ErrorKind.CONFLICT, result.error.kind)

    def test_complete_adds_to_previous_total(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS, seconds=400)
        done, _, _ = complete_session(subtask, _session(), 100, NOW).value
        self.assertEqual(500, done.total_time_seconds)


class TestElapsedValidation(unittest.TestCase):
    def test_accepts_bounds(self) -> None:
        self.assertEqual(Ok(0), validate_elapsed(0))
        self.assertEqual(Ok(100), validate_elapsed(100, 100, max_elapsed_seconds=100))
        self.assertTrue(is_ok(validate_elapsed(5)))
        self.assertTrue(is_err(validate_elapsed(-5)))

    def test_rejects_bad_values(self) -> None:
        for value, current in ((-1, 0), (101, 0), (50, 60)):
            result = validate_elapsed(value, current, max_elapsed_seconds=100)
            self.assertIsInstance(result, Err, value)
            self.assertEqual(ErrorKind.VALIDATION, result.error.kind)

    def test_rejects_non_integers(self) -> None:
        self.assertIsInstance(validate_elapsed(True), Err)
        self.assertIsInstance(validate_elapsed(1.5), Err)  # type: ignore[arg-type]

    def test_checkpoint_updates_duration_only(self) -> None:
        subtask = make_subtask(status=SubtaskStatus.IN_PROGRESS)
        result = checkpoint_session(subtask, _session(duration=10), 45)
        self.assertIsInstance(result, Ok)
        self.assertEqual(45, result.value.duration_seconds)
        self.assertIsNone(result.value.paused_at)


class TestTotals(unittest.TestCase):
    def test_historical_total_excludes_active(self) -> None:
        sessions = [_session(100, ended=True), _session(250, ended=True), _session(999)]
        self.assertEqual(350, historical_total(sessions))

    def test_current_session_elapsed(self) -> None:
        self.assertEqual(90, current_session_elapsed(_session(), NOW + timedelta(seconds=90)))
        self.assertIsNone(current_session_elapsed(_session(ended=True), NOW))


if __name__ == "__main__":
    unittest.main()
