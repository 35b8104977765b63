"""
Read-only checks against family membership owned by the family service.
"""

from __future__ import annotations

from hearth.db import DbClient, FamilyMemberRecord
from hearth.errors import ForbiddenError
from hearth.types import FamilyRole


def require_membership(
    db: DbClient, family_id: str, user_id: str
) -> FamilyMemberRecord:
    member = db.get_family_member(family_id, user_id)
    if not member:
        raise ForbiddenError("You are not a member of this family")
    return member


def is_admin(db: DbClient, family_id: str, user_id: str) -> bool:
    member = db.get_family_member(family_id, user_id)
    return bool(member and member.role == FamilyRole.ADMIN)
