"""
Challenge lifecycle, participation and the daily log upsert.

Functions take the store and, where progress is involved, ``now`` explicitly.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from hearth.dates import to_day, to_midnight
from hearth.db import ChallengeRecord, DailyLogRecord, DbClient, ParticipantRecord
from hearth.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from hearth.membership import require_membership
from hearth.progress import ChallengeProgress, get_participant_progress
from hearth.types import ChallengeStatus, ChallengeType, FastingStatus

logger = logging.getLogger(__name__)

DEFAULT_STATUS = ChallengeStatus.ACTIVE
DEFAULT_TYPE = ChallengeType.FASTING

# The start date and type are fixed once a challenge exists.
UPDATABLE_FIELDS = frozenset(
    {"name", "description", "emoji", "end_date", "settings", "status"}
)
REQUIRED_FIELDS = frozenset({"name", "end_date", "status"})


@dataclass
class ChallengeView:
    challenge: ChallengeRecord
    participant_count: int
    is_participating: bool
    my_progress: Optional[ChallengeProgress] = None


@dataclass
class ParticipantView:
    participant: ParticipantRecord
    progress: ChallengeProgress


def _get_or_404(db: DbClient, challenge_id: str) -> ChallengeRecord:
    challenge = db.get_challenge(challenge_id)
    if not challenge:
        raise NotFoundError("Challenge not found")
    return challenge


def _view(db: DbClient, challenge: ChallengeRecord, user_id: str) -> ChallengeView:
    participant = db.get_participant(challenge.challenge_id, user_id)
    return ChallengeView(
        challenge=challenge,
        participant_count=db.count_participants(challenge.challenge_id),
        is_participating=participant is not None,
    )


def create_challenge(
    db: DbClient,
    family_id: str,
    user_id: str,
    *,
    name: str,
    start_date: date | datetime,
    end_date: date | datetime,
    type: ChallengeType | str | None = None,
    description: Optional[str] = None,
    emoji: Optional[str] = None,
    settings: Optional[dict] = None,
) -> ChallengeView:
    """Create a challenge in ``family_id``; the creator joins it immediately."""
    require_membership(db, family_id, user_id)
    start, end = to_midnight(start_date), to_midnight(end_date)
    if end < start:
        raise InvalidInputError("end_date must not be before start_date")

    challenge = db.create_challenge(
        ChallengeRecord(
            challenge_id=uuid.uuid4().hex,
            family_id=family_id,
            created_by_id=user_id,
            name=name,
            start_date=start,
            end_date=end,
            type=ChallengeType(type) if type else DEFAULT_TYPE,
            status=DEFAULT_STATUS,
            description=description,
            emoji=emoji,
            settings=settings,
        )
    )
    logger.info(
        "Challenge %s created in family %s by %s",
        challenge.challenge_id,
        family_id,
        user_id,
    )
    return _view(db, challenge, user_id)


def list_family_challenges(
    db: DbClient, family_id: str, user_id: str
) -> list[ChallengeView]:
    require_membership(db, family_id, user_id)
    return [_view(db, c, user_id) for c in db.list_family_challenges(family_id)]


def get_challenge(
    db: DbClient, challenge_id: str, user_id: str, now: datetime
) -> ChallengeView:
    challenge = _get_or_404(db, challenge_id)
    require_membership(db, challenge.family_id, user_id)
    view = _view(db, challenge, user_id)
    if view.is_participating:
        view.my_progress = get_participant_progress(db, challenge_id, user_id, now)
    return view


def update_challenge(
    db: DbClient, challenge_id: str, user_id: str, changes: dict
) -> ChallengeView:
    """Apply ``changes`` to a challenge. Only its creator may do this."""
    challenge = _get_or_404(db, challenge_id)
    if challenge.created_by_id != user_id:
        raise ForbiddenError("Only the creator can update this challenge")

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(
            f"Cannot update challenge fields: {', '.join(sorted(unknown))}"
        )
    # Required columns cannot be cleared; a null means "leave unchanged".
    changes = {
        key: value
        for key, value in changes.items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    if "status" in changes:
        changes["status"] = ChallengeStatus(changes["status"])
    if "end_date" in changes:
        changes["end_date"] = to_midnight(changes["end_date"])
        if changes["end_date"] < challenge.start_date:
            raise InvalidInputError("end_date must not be before start_date")

    updated = db.update_challenge(challenge_id, changes)
    if not updated:
        raise NotFoundError("Challenge not found")
    return _view(db, updated, user_id)


def delete_challenge(db: DbClient, challenge_id: str, user_id: str) -> None:
    challenge = _get_or_404(db, challenge_id)
    if challenge.created_by_id != user_id:
        raise ForbiddenError("Only the creator can delete this challenge")
    db.delete_challenge(challenge_id)
    logger.info("Challenge %s deleted by %s", challenge_id, user_id)


def join_challenge(db: DbClient, challenge_id: str, user_id: str) -> ParticipantRecord:
    challenge = _get_or_404(db, challenge_id)
    require_membership(db, challenge.family_id, user_id)
    participant = db.add_participant(challenge_id, user_id)
    if not participant:
        raise ConflictError("Already participating in this challenge")
    logger.info("User %s joined challenge %s", user_id, challenge_id)
    return participant


def leave_challenge(db: DbClient, challenge_id: str, user_id: str) -> None:
    if not db.remove_participant(challenge_id, user_id):
        raise NotFoundError("Not a participant")
    logger.info("User %s left challenge %s", user_id, challenge_id)


def list_participants(
    db: DbClient, challenge_id: str, user_id: str, now: datetime
) -> list[ParticipantView]:
    challenge = _get_or_404(db, challenge_id)
    require_membership(db, challenge.family_id, user_id)
    return [
        ParticipantView(
            participant=p,
            progress=get_participant_progress(db, challenge_id, p.user_id, now),
        )
        for p in db.list_participants(challenge_id)
    ]


def log_day(
    db: DbClient,
    challenge_id: str,
    user_id: str,
    log_date: date | datetime,
    *,
    completed: Optional[bool] = None,
    notes: Optional[str] = None,
    fasting_status: FastingStatus | str | None = None,
) -> DailyLogRecord:
    """
    Record a participant's day, creating or updating the single log for it.

    Only the supplied fields are written; a newly created log defaults to
    ``completed=False``. The store performs the insert-or-update atomically
    on ``(challenge_id, user_id, day)``.
    """
    if not db.get_participant(challenge_id, user_id):
        raise ForbiddenError("You must join the challenge to log progress")

    fields: dict = {}
    if completed is not None:
        fields["completed"] = completed
    if notes is not None:
        fields["notes"] = notes
    if fasting_status is not None:
        fields["fasting_status"] = FastingStatus(fasting_status)

    day = to_day(log_date)
    log = db.upsert_log(challenge_id, user_id, day, fields)
    logger.info(
        "Logged %s for user %s in challenge %s (completed=%s)",
        day.isoformat(),
        user_id,
        challenge_id,
        log.completed,
    )
    return log


def list_logs(
    db: DbClient,
    challenge_id: str,
    user_id: str,
    for_user_id: Optional[str] = None,
) -> list[DailyLogRecord]:
    """Logs for ``for_user_id`` (default: the caller), newest first."""
    challenge = _get_or_404(db, challenge_id)
    require_membership(db, challenge.family_id, user_id)
    return db.list_logs(challenge_id, for_user_id or user_id)
