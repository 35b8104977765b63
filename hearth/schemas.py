"""
Pydantic schemas for the Hearth FastAPI backend.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from hearth.types import (
    ChallengeStatus,
    ChallengeType,
    FastingStatus,
    MilestoneType,
)

TIME_OF_DAY = r"^([01]\d|2[0-3]):[0-5]\d$"


class FastingSettings(BaseModel):
    feeding_window_start: str = Field(..., pattern=TIME_OF_DAY)  # "12:00"
    feeding_window_end: str = Field(..., pattern=TIME_OF_DAY)  # "20:00"
    fasting_hours: float = Field(..., gt=0, le=72)  # e.g. 16 for 16:8


class CreateChallengeRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    emoji: Optional[str] = Field(default=None, max_length=50)
    type: Optional[ChallengeType] = None
    start_date: dt.date
    end_date: dt.date
    settings: Optional[FastingSettings] = None

    @model_validator(mode="after")
    def check_window(self) -> "CreateChallengeRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class UpdateChallengeRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    emoji: Optional[str] = Field(default=None, max_length=50)
    end_date: Optional[dt.date] = None
    settings: Optional[FastingSettings] = None
    status: Optional[ChallengeStatus] = None


class ChallengeProgressResponse(BaseModel):
    total_days: int
    completed_days: int
    current_streak: int
    completion_rate: int


class ChallengeResponse(BaseModel):
    challenge_id: str
    family_id: str
    created_by_id: str
    name: str
    description: Optional[str] = None
    emoji: Optional[str] = None
    type: ChallengeType
    start_date: dt.datetime
    end_date: dt.datetime
    settings: Optional[dict] = None
    status: ChallengeStatus
    created_at: dt.datetime
    participant_count: int
    is_participating: bool
    my_progress: Optional[ChallengeProgressResponse] = None


class ListChallengesResponse(BaseModel):
    challenges: list[ChallengeResponse]


class ParticipantResponse(BaseModel):
    participant_id: str
    challenge_id: str
    user_id: str
    status: str
    joined_at: dt.datetime
    progress: ChallengeProgressResponse


class ListParticipantsResponse(BaseModel):
    participants: list[ParticipantResponse]


class LogDayRequest(BaseModel):
    # Timestamps are accepted and reduced to their calendar day.
    date: dt.datetime | dt.date
    completed: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    fasting_status: Optional[FastingStatus] = None


class DailyLogResponse(BaseModel):
    log_id: str
    challenge_id: str
    user_id: str
    date: dt.date
    completed: bool
    notes: Optional[str] = None
    fasting_status: Optional[FastingStatus] = None
    created_at: dt.datetime


class ListLogsResponse(BaseModel):
    logs: list[DailyLogResponse]


class CreateMilestoneRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    date: dt.datetime | dt.date
    type: Optional[MilestoneType] = None
    recurring: Optional[bool] = None
    emoji: Optional[str] = Field(default=None, max_length=50)
    person_name: Optional[str] = Field(default=None, max_length=100)


class UpdateMilestoneRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    date: Optional[dt.datetime | dt.date] = None
    type: Optional[MilestoneType] = None
    recurring: Optional[bool] = None
    emoji: Optional[str] = Field(default=None, max_length=50)
    person_name: Optional[str] = Field(default=None, max_length=100)


class MilestoneResponse(BaseModel):
    milestone_id: str
    family_id: str
    created_by_id: str
    title: str
    description: Optional[str] = None
    date: dt.datetime
    type: MilestoneType
    recurring: bool
    emoji: Optional[str] = None
    person_name: Optional[str] = None
    created_at: dt.datetime
    days_until: Optional[int] = None


class ListMilestonesResponse(BaseModel):
    milestones: list[MilestoneResponse]


class MessageResponse(BaseModel):
    message: str
