"""
Participant progress for a challenge: elapsed days, completions, streak.

``compute_progress`` is pure; ``get_participant_progress`` loads its inputs
from the store. Neither reads the wall clock, so ``now`` is always explicit.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Sequence

from hearth.dates import ONE_DAY, as_instant, to_day
from hearth.db import DbClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChallengeProgress:
    total_days: int = 0
    completed_days: int = 0
    current_streak: int = 0
    completion_rate: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def count_total_days(
    start_date: date | datetime, end_date: date | datetime, now: datetime
) -> int:
    """Elapsed challenge days up to ``now``, inclusive of both endpoints."""
    start = as_instant(start_date)
    effective_end = min(as_instant(end_date), as_instant(now))
    elapsed = (effective_end - start) / ONE_DAY
    return max(0, math.floor(elapsed) + 1)


def compute_streak(completed_dates_desc: Sequence[date], now: datetime) -> int:
    """
    Length of the run of consecutive completed days ending today.

    If today is not logged yet the run may end yesterday instead. Dates must be
    unique calendar days ordered newest first.
    """
    if not completed_dates_desc:
        return 0

    today = to_day(now)
    newest = to_day(completed_dates_desc[0])
    anchor = today if newest == today else today - ONE_DAY

    streak = 0
    for offset, logged in enumerate(completed_dates_desc):
        if to_day(logged) != anchor - offset * ONE_DAY:
            break
        streak += 1
    return streak


def completion_rate(completed_days: int, total_days: int) -> int:
    """Whole percentage, rounded half up and capped at 100."""
    if total_days <= 0:
        return 0
    rate = math.floor(completed_days * 100 / total_days + 0.5)
    return max(0, min(100, rate))


def compute_progress(
    start_date: date | datetime,
    end_date: date | datetime,
    now: datetime,
    completed_days: int,
    completed_dates_desc: Sequence[date],
) -> ChallengeProgress:
    total_days = count_total_days(start_date, end_date, now)
    return ChallengeProgress(
        total_days=total_days,
        completed_days=completed_days,
        current_streak=compute_streak(completed_dates_desc, now),
        completion_rate=completion_rate(completed_days, total_days),
    )


def get_participant_progress(
    db: DbClient, challenge_id: str, user_id: str, now: datetime
) -> ChallengeProgress:
    """
    Progress summary for one participant.

    A missing challenge yields an all-zero summary instead of an error.
    """
    challenge = db.get_challenge(challenge_id)
    if not challenge:
        return ChallengeProgress()

    progress = compute_progress(
        challenge.start_date,
        challenge.end_date,
        now,
        db.count_completed_logs(challenge_id, user_id),
        db.list_completed_log_dates(challenge_id, user_id),
    )
    logger.debug(
        "Progress for user %s in challenge %s: %s", user_id, challenge_id, progress
    )
    return progress
