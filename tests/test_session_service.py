from __future__ import annotations

from datetime import timedelta
import unittest

from devfocus.application import (
    complete_subtask,
    create_subtask,
    create_task,
    get_category_experience,
    get_subtask_with_session,
    list_categories,
    pause_subtask,
    resume_subtask,
    start_subtask,
    update_session_duration,
)
from devfocus.domain.shared import Err, ErrorKind
from devfocus.domain.task import SubtaskStatus
from devfocus.infrastructure.storage import SessionRepository, Store
from tests.helpers import NOW, make_store, ok_value


class SessionServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store()
        self.addCleanup(self.store.close)
        self.task = ok_value(create_task(self.store, "Ship login page", now=NOW))
        categories = ok_value(list_categories(self.store))
        self.backend = next(c for c in categories if c.name == "backend")

    def _subtask(self, category_id: str | None = None, title: str = "Build form"):
        return ok_value(create_subtask(self.store, self.task.id, title, category_id, now=NOW))


class TestCompletionScenario(SessionServiceTestCase):
    def test_backend_completion_credits_points_and_xp(self) -> None:
        subtask = self._subtask(self.backend.id)
        ok_value(start_subtask(self.store, subtask.id, now=NOW))

        completion = ok_value(
            complete_subtask(self.store, subtask.id, 1200, now=NOW + timedelta(minutes=20))
        )
        self.assertEqual(15, completion.points_earned)
        self.assertEqual(1200, completion.xp_gained)
        self.assertEqual(1200, completion.time_spent_seconds)
        self.assertEqual("backend", completion.category.name)
        self.assertEqual(SubtaskStatus.DONE, completion.subtask.status)

        ledger = ok_value(get_category_experience(self.store, self.backend.id))
        self.assertEqual(1200, ledger.total_xp)
        self.assertEqual(4, ledger.level)

    def test_completed_subtask_has_historical_total_and_no_session(self) -> None:
        subtask = self._subtask(self.backend.id)
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        ok_value(complete_subtask(self.store, subtask.id, 1700, now=NOW))

        view = ok_value(get_subtask_with_session(self.store, subtask.id))
        self.assertIsNone(view.session)
        self.assertEqual(1700, view.subtask.total_time_seconds)
        self.assertIsNotNone(view.subtask.completed_at)

    def test_uncategorized_completion_earns_no_xp(self) -> None:
        subtask = self._subtask()
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        completion = ok_value(complete_subtask(self.store, subtask.id, 1500, now=NOW))
        self.assertEqual(10, completion.points_earned)
        self.assertEqual(0, completion.xp_gained)
        self.assertIsNone(completion.category)


class TestTransitions(SessionServiceTestCase):
    def test_pause_resume_complete(self) -> None:
        subtask = self._subtask(self.backend.id)
        started = ok_value(start_subtask(self.store, subtask.id, now=NOW))
        paused = ok_value(pause_subtask(self.store, subtask.id, 600, now=NOW + timedelta(minutes=10)))
        self.assertEqual(started.id, paused.id)
        self.assertEqual(600, paused.duration_seconds)

        resumed = ok_value(resume_subtask(self.store, subtask.id, now=NOW + timedelta(minutes=15)))
        self.assertEqual(600, resumed.duration_seconds)
        self.assertIsNotNone(resumed.resumed_at)

        completion = ok_value(complete_subtask(self.store, subtask.id, 1300, now=NOW + timedelta(minutes=30)))
        self.assertEqual(15, completion.points_earned)

    def test_starting_twice_is_conflict(self) -> None:
        subtask = self._subtask()
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        result = start_subtask(self.store, subtask.id, now=NOW)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.CONFLICT, result.error.kind)

        with self.store.transaction() as session:
            sessions = SessionRepository(session).list_for_subtask(subtask.id)
        self.assertEqual(1, len(sessions))

    def test_unknown_subtask_is_not_found(self) -> None:
        for result in (
            start_subtask(self.store, "missing"),
            pause_subtask(self.store, "missing", 10),
            resume_subtask(self.store, "missing"),
            complete_subtask(self.store, "missing", 10),
            get_subtask_with_session(self.store, "missing"),
        ):
            self.assertIsInstance(result, Err)
            self.assertEqual(ErrorKind.NOT_FOUND, result.error.kind)

    def test_done_subtask_accepts_no_transition(self) -> None:
        subtask = self._subtask()
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        ok_value(complete_subtask(self.store, subtask.id, 100, now=NOW))
        for result in (
            start_subtask(self.store, subtask.id),
            pause_subtask(self.store, subtask.id, 200),
            resume_subtask(self.store, subtask.id),
            complete_subtask(self.store, subtask.id, 200),
        ):
            self.assertEqual(ErrorKind.CONFLICT, result.error.kind)

    def test_rejected_elapsed_leaves_state_unchanged(self) -> None:
        subtask = self._subtask()
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        ok_value(update_session_duration(self.store, subtask.id, 300))

        result = pause_subtask(self.store, subtask.id, 200, now=NOW)
        self.assertEqual(ErrorKind.VALIDATION, result.error.kind)

        view = ok_value(get_subtask_with_session(self.store, subtask.id))
        self.assertEqual(SubtaskStatus.IN_PROGRESS, view.subtask.status)
        self.assertEqual(300, view.session.duration_seconds)
        self.assertIsNone(view.session.paused_at)

    def test_elapsed_above_maximum_is_rejected(self) -> None:
        subtask = self._subtask()
        ok_value(start_subtask(self.store, subtask.id, now=NOW))
        result = complete_subtask(self.store, subtask.id, 5000, max_elapsed_seconds=3600)
        self.assertEqual(ErrorKind.VALIDATION, result.error.kind)

    def test_checkpoint_without_session_is_conflict(self) -> None:
        subtask = self._subtask()
        result = update_session_duration(self.store, subtask.id, 10)
        self.assertEqual(ErrorKind.CONFLICT, result.error.kind)


class TestStoreFailures(unittest.TestCase):
    def test_closed_store_is_unavailable(self) -> None:
        store = make_store()
        store.close()
        result = create_task(store, "Anything")
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.STORE_UNAVAILABLE, result.error.kind)

    def test_lock_timeout_is_unavailable(self) -> None:
        store = Store("sqlite://", lock_timeout_seconds=0.01)
        store.initialize()
        self.addCleanup(store.close)
        with store.transaction():
            result = list_categories(store)
        self.assertEqual(ErrorKind.STORE_UNAVAILABLE, result.error.kind)
        self.assertEqual(5, len(ok_value(list_categories(store))))


if __name__ == "__main__":
    unittest.main()
