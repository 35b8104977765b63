"""
Family milestones: birthdays, anniversaries and other dated events.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Optional

from hearth.dates import as_instant
from hearth.db import DbClient, MilestoneRecord
from hearth.errors import ForbiddenError, InvalidInputError, NotFoundError
from hearth.membership import is_admin, require_membership
from hearth.types import MilestoneType

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "date", "type", "recurring", "emoji", "person_name"}
)
REQUIRED_FIELDS = frozenset({"title", "date", "type", "recurring"})


def _get_or_404(db: DbClient, milestone_id: str) -> MilestoneRecord:
    milestone = db.get_milestone(milestone_id)
    if not milestone:
        raise NotFoundError("Milestone not found")
    return milestone


def _require_editor(
    db: DbClient, milestone: MilestoneRecord, user_id: str, action: str
) -> None:
    if milestone.created_by_id == user_id:
        return
    if is_admin(db, milestone.family_id, user_id):
        return
    raise ForbiddenError(f"You can only {action} milestones you created")


def create_milestone(
    db: DbClient,
    family_id: str,
    user_id: str,
    *,
    title: str,
    date: date | datetime,
    type: MilestoneType | str | None = None,
    recurring: Optional[bool] = None,
    description: Optional[str] = None,
    emoji: Optional[str] = None,
    person_name: Optional[str] = None,
) -> MilestoneRecord:
    require_membership(db, family_id, user_id)
    milestone = db.create_milestone(
        MilestoneRecord(
            milestone_id=uuid.uuid4().hex,
            family_id=family_id,
            created_by_id=user_id,
            title=title,
            date=as_instant(date),
            type=MilestoneType(type) if type else MilestoneType.CUSTOM,
            recurring=bool(recurring),
            description=description,
            emoji=emoji,
            person_name=person_name,
        )
    )
    logger.info(
        "Milestone %s created in family %s by %s",
        milestone.milestone_id,
        family_id,
        user_id,
    )
    return milestone


def list_family_milestones(
    db: DbClient, family_id: str, user_id: str
) -> list[MilestoneRecord]:
    require_membership(db, family_id, user_id)
    return db.list_family_milestones(family_id)


def get_milestone(db: DbClient, milestone_id: str, user_id: str) -> MilestoneRecord:
    milestone = _get_or_404(db, milestone_id)
    require_membership(db, milestone.family_id, user_id)
    return milestone


def update_milestone(
    db: DbClient, milestone_id: str, user_id: str, changes: dict
) -> MilestoneRecord:
    """Edit a milestone; allowed for its creator and family admins."""
    milestone = _get_or_404(db, milestone_id)
    _require_editor(db, milestone, user_id, "edit")

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidInputError(
            f"Cannot update milestone fields: {', '.join(sorted(unknown))}"
        )
    changes = {
        key: value
        for key, value in changes.items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    if "date" in changes:
        changes["date"] = as_instant(changes["date"])
    if "type" in changes:
        changes["type"] = MilestoneType(changes["type"])

    updated = db.update_milestone(milestone_id, changes)
    if not updated:
        raise NotFoundError("Milestone not found")
    return updated


def delete_milestone(db: DbClient, milestone_id: str, user_id: str) -> None:
    milestone = _get_or_404(db, milestone_id)
    _require_editor(db, milestone, user_id, "delete")
    db.delete_milestone(milestone_id)
    logger.info("Milestone %s deleted by %s", milestone_id, user_id)
