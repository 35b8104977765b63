import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

from hearth import challenges
from hearth.db import InMemoryDbClient
from hearth.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from hearth.types import ChallengeStatus, ChallengeType, FastingStatus

NOW = datetime(2024, 3, 10, 9, 30)


class ChallengeLifecycleTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.add_family_member("fam", "alice")
        self.db.add_family_member("fam", "bob")
        view = challenges.create_challenge(
            self.db,
            "fam",
            "alice",
            name="16:8 fast",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
            settings={
                "feeding_window_start": "12:00",
                "feeding_window_end": "20:00",
                "fasting_hours": 16,
            },
        )
        self.challenge_id = view.challenge.challenge_id

    def test_defaults_and_creator_auto_joins(self):
        view = challenges.get_challenge(self.db, self.challenge_id, "alice", NOW)
        self.assertEqual(view.challenge.type, ChallengeType.FASTING)
        self.assertEqual(view.challenge.status, ChallengeStatus.ACTIVE)
        self.assertEqual(view.challenge.start_date, datetime(2024, 3, 1))
        self.assertEqual(view.participant_count, 1)
        self.assertTrue(view.is_participating)
        self.assertEqual(view.my_progress.total_days, 10)

    def test_non_participant_view_has_no_progress(self):
        view = challenges.get_challenge(self.db, self.challenge_id, "bob", NOW)
        self.assertFalse(view.is_participating)
        self.assertIsNone(view.my_progress)

    def test_create_requires_membership(self):
        with self.assertRaises(ForbiddenError):
            challenges.create_challenge(
                self.db,
                "fam",
                "mallory",
                name="x",
                start_date=date(2024, 3, 1),
                end_date=date(2024, 3, 2),
            )

    def test_create_rejects_inverted_window(self):
        with self.assertRaises(InvalidInputError):
            challenges.create_challenge(
                self.db,
                "fam",
                "alice",
                name="x",
                start_date=date(2024, 3, 2),
                end_date=date(2024, 3, 1),
            )

    def test_get_missing_and_foreign(self):
        with self.assertRaises(NotFoundError):
            challenges.get_challenge(self.db, "missing", "alice", NOW)
        with self.assertRaises(ForbiddenError):
            challenges.get_challenge(self.db, self.challenge_id, "mallory", NOW)

    def test_list_family_challenges(self):
        challenges.create_challenge(
            self.db,
            "fam",
            "bob",
            name="Pushups",
            type="exercise",
            start_date=date(2024, 3, 5),
            end_date=date(2024, 4, 5),
        )
        views = challenges.list_family_challenges(self.db, "fam", "alice")
        self.assertEqual(len(views), 2)
        by_name = {v.challenge.name: v for v in views}
        self.assertTrue(by_name["16:8 fast"].is_participating)
        self.assertFalse(by_name["Pushups"].is_participating)
        self.assertEqual(by_name["Pushups"].challenge.type, ChallengeType.EXERCISE)

    def test_only_creator_updates(self):
        with self.assertRaises(ForbiddenError):
            challenges.update_challenge(
                self.db, self.challenge_id, "bob", {"status": "completed"}
            )
        view = challenges.update_challenge(
            self.db,
            self.challenge_id,
            "alice",
            {"status": "completed", "end_date": date(2024, 4, 15), "name": None},
        )
        self.assertEqual(view.challenge.status, ChallengeStatus.COMPLETED)
        self.assertEqual(view.challenge.end_date, datetime(2024, 4, 15))
        self.assertEqual(view.challenge.name, "16:8 fast")

    def test_update_rejects_unknown_status(self):
        with self.assertRaises(ValueError):
            challenges.update_challenge(
                self.db, self.challenge_id, "alice", {"status": "paused"}
            )

    def test_update_rejects_immutable_fields(self):
        with self.assertRaises(InvalidInputError):
            challenges.update_challenge(
                self.db, self.challenge_id, "alice", {"start_date": date(2024, 1, 1)}
            )
        with self.assertRaises(InvalidInputError):
            challenges.update_challenge(
                self.db, self.challenge_id, "alice", {"end_date": date(2024, 2, 1)}
            )

    def test_delete_removes_participants_and_logs(self):
        challenges.log_day(self.db, self.challenge_id, "alice", NOW, completed=True)
        with self.assertRaises(ForbiddenError):
            challenges.delete_challenge(self.db, self.challenge_id, "bob")
        challenges.delete_challenge(self.db, self.challenge_id, "alice")
        self.assertIsNone(self.db.get_challenge(self.challenge_id))
        self.assertEqual(self.db.list_participants(self.challenge_id), [])
        self.assertEqual(self.db.list_logs(self.challenge_id, "alice"), [])


class ParticipationTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.add_family_member("fam", "alice")
        self.db.add_family_member("fam", "bob")
        self.challenge_id = challenges.create_challenge(
            self.db,
            "fam",
            "alice",
            name="Walk",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
        ).challenge.challenge_id

    def test_join_and_leave(self):
        challenges.join_challenge(self.db, self.challenge_id, "bob")
        with self.assertRaises(ConflictError):
            challenges.join_challenge(self.db, self.challenge_id, "bob")

        participants = challenges.list_participants(
            self.db, self.challenge_id, "alice", NOW
        )
        self.assertEqual([p.participant.user_id for p in participants], ["alice", "bob"])

        challenges.leave_challenge(self.db, self.challenge_id, "bob")
        with self.assertRaises(NotFoundError):
            challenges.leave_challenge(self.db, self.challenge_id, "bob")

    def test_join_checks(self):
        with self.assertRaises(NotFoundError):
            challenges.join_challenge(self.db, "missing", "bob")
        with self.assertRaises(ForbiddenError):
            challenges.join_challenge(self.db, self.challenge_id, "mallory")
        with self.assertRaises(ConflictError):
            challenges.join_challenge(self.db, self.challenge_id, "alice")


class LogDayTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.add_family_member("fam", "alice")
        self.db.add_family_member("fam", "bob")
        self.challenge_id = challenges.create_challenge(
            self.db,
            "fam",
            "alice",
            name="Fast",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
        ).challenge.challenge_id

    def test_requires_participation(self):
        with self.assertRaises(ForbiddenError):
            challenges.log_day(self.db, self.challenge_id, "bob", date(2024, 3, 9))

    def test_same_day_is_upserted(self):
        challenges.log_day(
            self.db, self.challenge_id, "alice", datetime(2024, 3, 9, 7, 0), completed=True
        )
        log = challenges.log_day(
            self.db,
            self.challenge_id,
            "alice",
            datetime(2024, 3, 9, 22, 15),
            completed=False,
        )
        logs = challenges.list_logs(self.db, self.challenge_id, "alice")
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0].log_id, log.log_id)
        self.assertEqual(logs[0].date, date(2024, 3, 9))
        self.assertFalse(logs[0].completed)

    def test_omitted_fields_are_kept(self):
        first = challenges.log_day(
            self.db,
            self.challenge_id,
            "alice",
            date(2024, 3, 9),
            notes="hungry",
            fasting_status="fasting",
        )
        self.assertFalse(first.completed)

        second = challenges.log_day(
            self.db, self.challenge_id, "alice", date(2024, 3, 9), completed=True
        )
        self.assertTrue(second.completed)
        self.assertEqual(second.notes, "hungry")
        self.assertEqual(second.fasting_status, FastingStatus.FASTING)

    def test_rejects_unknown_fasting_status(self):
        with self.assertRaises(ValueError):
            challenges.log_day(
                self.db,
                self.challenge_id,
                "alice",
                date(2024, 3, 9),
                fasting_status="snacking",
            )

    def test_list_logs_for_other_member(self):
        challenges.join_challenge(self.db, self.challenge_id, "bob")
        challenges.log_day(self.db, self.challenge_id, "bob", date(2024, 3, 8), completed=True)
        challenges.log_day(self.db, self.challenge_id, "bob", date(2024, 3, 9), completed=True)

        logs = challenges.list_logs(self.db, self.challenge_id, "alice", for_user_id="bob")
        self.assertEqual([log.date for log in logs], [date(2024, 3, 9), date(2024, 3, 8)])
        self.assertEqual(challenges.list_logs(self.db, self.challenge_id, "alice"), [])

    def test_concurrent_logs_for_one_day_share_a_row(self):
        def log(i):
            return challenges.log_day(
                self.db,
                self.challenge_id,
                "alice",
                date(2024, 3, 9),
                completed=i % 2 == 0,
                notes=f"entry {i}",
            )

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(log, range(64)))

        logs = challenges.list_logs(self.db, self.challenge_id, "alice")
        self.assertEqual(len(logs), 1)
        self.assertEqual({r.log_id for r in results}, {logs[0].log_id})


class InMemoryStoreTests(unittest.TestCase):
    def test_reset_waits_for_writers(self):
        db = InMemoryDbClient()
        db.add_family_member("fam", "alice")

        db._lock.acquire()
        worker = threading.Thread(target=db.reset)
        worker.start()
        worker.join(timeout=0.1)
        self.assertTrue(worker.is_alive())
        self.assertIsNotNone(db.get_family_member("fam", "alice"))

        db._lock.release()
        worker.join(timeout=5)
        self.assertFalse(worker.is_alive())
        self.assertIsNone(db.get_family_member("fam", "alice"))


if __name__ == "__main__":
    unittest.main()
