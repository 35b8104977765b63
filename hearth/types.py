"""
Enumerated labels shared by the storage layer and the API.
"""

from __future__ import annotations

from enum import Enum


class ChallengeStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChallengeType(str, Enum):
    FASTING = "fasting"
    EXERCISE = "exercise"
    CUSTOM = "custom"


class FastingStatus(str, Enum):
    FASTING = "fasting"
    FEEDING = "feeding"
    BROKE_FAST = "broke_fast"


class MilestoneType(str, Enum):
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    ACHIEVEMENT = "achievement"
    CUSTOM = "custom"


class FamilyRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
