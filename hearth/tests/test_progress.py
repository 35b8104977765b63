import unittest
from datetime import date, datetime, timedelta

from hearth.db import ChallengeRecord, InMemoryDbClient
from hearth.progress import (
    ChallengeProgress,
    compute_progress,
    compute_streak,
    count_total_days,
    get_participant_progress,
)

START = datetime(2024, 3, 1)
END = datetime(2024, 3, 31)
NOW = datetime(2024, 3, 10, 9, 30)


def march(*days):
    return [date(2024, 3, d) for d in days]


class StreakTests(unittest.TestCase):
    def test_run_ending_today(self):
        self.assertEqual(compute_streak(march(10, 9, 8), NOW), 3)

    def test_run_ending_yesterday_counts_when_today_not_logged(self):
        self.assertEqual(compute_streak(march(9, 8), NOW), 2)

    def test_gap_ends_the_run(self):
        self.assertEqual(compute_streak(march(9, 7), NOW), 1)

    def test_gap_after_today(self):
        self.assertEqual(compute_streak(march(10, 8, 7), NOW), 1)

    def test_empty_history(self):
        self.assertEqual(compute_streak([], NOW), 0)

    def test_stale_history(self):
        self.assertEqual(compute_streak(march(8, 7, 6), NOW), 0)

    def test_future_log_breaks_streak(self):
        self.assertEqual(compute_streak(march(11, 10, 9), NOW), 0)

    def test_across_month_boundary(self):
        dates = [date(2024, 3, 1), date(2024, 2, 29), date(2024, 2, 28)]
        self.assertEqual(compute_streak(dates, datetime(2024, 3, 1, 23, 59)), 3)


class TotalDaysTests(unittest.TestCase):
    def test_counts_both_endpoints(self):
        self.assertEqual(count_total_days(START, END, NOW), 10)

    def test_first_day(self):
        self.assertEqual(count_total_days(START, END, datetime(2024, 3, 1, 8)), 1)

    def test_before_start_is_zero(self):
        self.assertEqual(count_total_days(START, END, datetime(2024, 2, 20)), 0)
        self.assertEqual(count_total_days(START, END, datetime(2024, 2, 29, 18)), 0)

    def test_fixed_after_end(self):
        self.assertEqual(count_total_days(START, END, datetime(2024, 4, 15)), 31)
        self.assertEqual(count_total_days(START, END, datetime(2025, 1, 1)), 31)

    def test_accepts_plain_dates(self):
        self.assertEqual(count_total_days(date(2024, 3, 1), date(2024, 3, 31), NOW), 10)

    def test_non_decreasing_until_end(self):
        previous = 0
        now = datetime(2024, 2, 25)
        while now < datetime(2024, 4, 10):
            current = count_total_days(START, END, now)
            self.assertGreaterEqual(current, previous)
            previous = current
            now += timedelta(hours=7)
        self.assertEqual(previous, 31)


class ComputeProgressTests(unittest.TestCase):
    def test_summary(self):
        progress = compute_progress(START, END, NOW, 3, march(10, 9, 8))
        self.assertEqual(
            progress,
            ChallengeProgress(
                total_days=10, completed_days=3, current_streak=3, completion_rate=30
            ),
        )

    def test_rate_rounds_half_up(self):
        # 1 of 8 days is 12.5%
        progress = compute_progress(START, END, datetime(2024, 3, 8, 12), 1, [])
        self.assertEqual(progress.total_days, 8)
        self.assertEqual(progress.completion_rate, 13)

    def test_rate_zero_when_no_elapsed_days(self):
        progress = compute_progress(START, END, datetime(2024, 2, 1), 5, [])
        self.assertEqual(progress.total_days, 0)
        self.assertEqual(progress.completion_rate, 0)

    def test_rate_capped_at_100(self):
        progress = compute_progress(START, END, datetime(2024, 3, 2, 10), 5, [])
        self.assertEqual(progress.completed_days, 5)
        self.assertEqual(progress.completion_rate, 100)

    def test_rate_is_bounded_integer(self):
        for completed in range(0, 40):
            for day in range(1, 32):
                now = datetime(2024, 3, day, 12)
                rate = compute_progress(START, END, now, completed, []).completion_rate
                self.assertIsInstance(rate, int)
                self.assertGreaterEqual(rate, 0)
                self.assertLessEqual(rate, 100)


class ParticipantProgressTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.create_challenge(
            ChallengeRecord(
                challenge_id="c1",
                family_id="fam",
                created_by_id="alice",
                name="Fast",
                start_date=START,
                end_date=END,
            )
        )

    def test_missing_challenge_gives_zero_summary(self):
        progress = get_participant_progress(self.db, "missing", "alice", NOW)
        self.assertEqual(progress, ChallengeProgress(0, 0, 0, 0))

    def test_uses_only_completed_logs(self):
        for day in (10, 9, 8):
            self.db.upsert_log("c1", "alice", date(2024, 3, day), {"completed": True})
        self.db.upsert_log("c1", "alice", date(2024, 3, 7), {"completed": False})
        self.db.upsert_log("c1", "alice", date(2024, 3, 6), {"completed": True})

        progress = get_participant_progress(self.db, "c1", "alice", NOW)
        self.assertEqual(progress.completed_days, 4)
        self.assertEqual(progress.current_streak, 3)
        self.assertEqual(progress.total_days, 10)
        self.assertEqual(progress.completion_rate, 40)

    def test_other_participants_do_not_count(self):
        self.db.upsert_log("c1", "bob", date(2024, 3, 10), {"completed": True})
        progress = get_participant_progress(self.db, "c1", "alice", NOW)
        self.assertEqual(progress.completed_days, 0)
        self.assertEqual(progress.current_streak, 0)


if __name__ == "__main__":
    unittest.main()
