"""
HTTP routes for the Hearth backend API.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from hearth import challenges, milestones
from hearth.config import get_settings
from hearth.db import DailyLogRecord, DbClient, MilestoneRecord
from hearth.dependencies import Clock, get_clock, get_current_user_id, get_db_client
from hearth.membership import require_membership
from hearth.progress import ChallengeProgress, get_participant_progress
from hearth.recurrence import get_upcoming_milestones
from hearth.schemas import (
    ChallengeProgressResponse,
    ChallengeResponse,
    CreateChallengeRequest,
    CreateMilestoneRequest,
    DailyLogResponse,
    ListChallengesResponse,
    ListLogsResponse,
    ListMilestonesResponse,
    ListParticipantsResponse,
    LogDayRequest,
    MessageResponse,
    MilestoneResponse,
    ParticipantResponse,
    UpdateChallengeRequest,
    UpdateMilestoneRequest,
)

router = APIRouter()


def _progress_response(progress: ChallengeProgress) -> ChallengeProgressResponse:
    return ChallengeProgressResponse(**progress.as_dict())


def _challenge_response(view: challenges.ChallengeView) -> ChallengeResponse:
    return ChallengeResponse(
        **view.challenge.as_dict(),
        participant_count=view.participant_count,
        is_participating=view.is_participating,
        my_progress=(
            _progress_response(view.my_progress) if view.my_progress else None
        ),
    )


def _log_response(log: DailyLogRecord) -> DailyLogResponse:
    return DailyLogResponse(**log.as_dict())


def _milestone_response(
    milestone: MilestoneRecord, days_until: Optional[int] = None
) -> MilestoneResponse:
    return MilestoneResponse(**milestone.as_dict(), days_until=days_until)


# Challenges


@router.post(
    "/families/{family_id}/challenges",
    response_model=ChallengeResponse,
    status_code=201,
)
def create_challenge(
    family_id: str,
    payload: CreateChallengeRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    view = challenges.create_challenge(
        db,
        family_id,
        user_id,
        name=payload.name,
        start_date=payload.start_date,
        end_date=payload.end_date,
        type=payload.type,
        description=payload.description,
        emoji=payload.emoji,
        settings=payload.settings.model_dump() if payload.settings else None,
    )
    return _challenge_response(view)


@router.get("/families/{family_id}/challenges", response_model=ListChallengesResponse)
def list_family_challenges(
    family_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    views = challenges.list_family_challenges(db, family_id, user_id)
    return ListChallengesResponse(challenges=[_challenge_response(v) for v in views])


@router.get("/challenges/{challenge_id}", response_model=ChallengeResponse)
def get_challenge(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
    clock: Clock = Depends(get_clock),
):
    view = challenges.get_challenge(db, challenge_id, user_id, clock())
    return _challenge_response(view)


@router.patch("/challenges/{challenge_id}", response_model=ChallengeResponse)
def update_challenge(
    challenge_id: str,
    payload: UpdateChallengeRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    view = challenges.update_challenge(
        db, challenge_id, user_id, payload.model_dump(exclude_unset=True)
    )
    return _challenge_response(view)


@router.delete("/challenges/{challenge_id}", status_code=204)
def delete_challenge(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    challenges.delete_challenge(db, challenge_id, user_id)
    return Response(status_code=204)


@router.post(
    "/challenges/{challenge_id}/join", response_model=MessageResponse, status_code=201
)
def join_challenge(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    challenges.join_challenge(db, challenge_id, user_id)
    return MessageResponse(message="Joined challenge")


@router.post("/challenges/{challenge_id}/leave", response_model=MessageResponse)
def leave_challenge(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    challenges.leave_challenge(db, challenge_id, user_id)
    return MessageResponse(message="Left challenge")


@router.get(
    "/challenges/{challenge_id}/participants", response_model=ListParticipantsResponse
)
def list_participants(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
    clock: Clock = Depends(get_clock),
):
    views = challenges.list_participants(db, challenge_id, user_id, clock())
    return ListParticipantsResponse(
        participants=[
            ParticipantResponse(
                participant_id=v.participant.participant_id,
                challenge_id=v.participant.challenge_id,
                user_id=v.participant.user_id,
                status=v.participant.status,
                joined_at=v.participant.joined_at,
                progress=_progress_response(v.progress),
            )
            for v in views
        ]
    )


@router.get(
    "/challenges/{challenge_id}/progress", response_model=ChallengeProgressResponse
)
def challenge_progress(
    challenge_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
    clock: Clock = Depends(get_clock),
):
    """
    The caller's progress. An unknown challenge reports zero progress.
    """
    challenge = db.get_challenge(challenge_id)
    if challenge:
        require_membership(db, challenge.family_id, user_id)
    progress = get_participant_progress(db, challenge_id, user_id, clock())
    return _progress_response(progress)


# Daily logs


@router.post(
    "/challenges/{challenge_id}/logs", response_model=DailyLogResponse, status_code=201
)
def log_day(
    challenge_id: str,
    payload: LogDayRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    log = challenges.log_day(
        db,
        challenge_id,
        user_id,
        payload.date,
        completed=payload.completed,
        notes=payload.notes,
        fasting_status=payload.fasting_status,
    )
    return _log_response(log)


@router.get("/challenges/{challenge_id}/logs", response_model=ListLogsResponse)
def list_logs(
    challenge_id: str,
    for_user_id: Optional[str] = Query(default=None, alias="user_id"),
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    logs = challenges.list_logs(db, challenge_id, user_id, for_user_id)
    return ListLogsResponse(logs=[_log_response(log) for log in logs])


# Milestones


@router.post(
    "/families/{family_id}/milestones",
    response_model=MilestoneResponse,
    status_code=201,
)
def create_milestone(
    family_id: str,
    payload: CreateMilestoneRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    milestone = milestones.create_milestone(
        db, family_id, user_id, **payload.model_dump()
    )
    return _milestone_response(milestone)


@router.get("/families/{family_id}/milestones", response_model=ListMilestonesResponse)
def list_family_milestones(
    family_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    items = milestones.list_family_milestones(db, family_id, user_id)
    return ListMilestonesResponse(milestones=[_milestone_response(m) for m in items])


# Registered before /milestones/{milestone_id} so "upcoming" is not read as an id.
@router.get("/milestones/upcoming", response_model=ListMilestonesResponse)
def upcoming_milestones(
    days: Optional[int] = Query(default=None, ge=1, le=366),
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
    clock: Clock = Depends(get_clock),
):
    window_days = days or get_settings().upcoming_window_days
    upcoming = get_upcoming_milestones(db, user_id, clock(), window_days)
    return ListMilestonesResponse(
        milestones=[
            _milestone_response(item.event, item.days_until) for item in upcoming
        ]
    )


@router.get("/milestones/{milestone_id}", response_model=MilestoneResponse)
def get_milestone(
    milestone_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    return _milestone_response(milestones.get_milestone(db, milestone_id, user_id))


@router.patch("/milestones/{milestone_id}", response_model=MilestoneResponse)
def update_milestone(
    milestone_id: str,
    payload: UpdateMilestoneRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    milestone = milestones.update_milestone(
        db, milestone_id, user_id, payload.model_dump(exclude_unset=True)
    )
    return _milestone_response(milestone)


@router.delete("/milestones/{milestone_id}", status_code=204)
def delete_milestone(
    milestone_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    milestones.delete_milestone(db, milestone_id, user_id)
    return Response(status_code=204)
