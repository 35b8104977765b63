"""
Projection of one-time and annually recurring events onto an upcoming window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Protocol

from hearth.dates import ONE_DAY, as_instant
from hearth.db import DbClient


class Anchored(Protocol):
    date: date | datetime
    recurring: bool


@dataclass(frozen=True)
class Upcoming:
    event: Any
    occurs_at: datetime
    days_until: int


def place_in_year(anchor: datetime, year: int) -> datetime:
    """Move ``anchor`` to ``year``; Feb 29 becomes Mar 1 in common years."""
    try:
        return anchor.replace(year=year)
    except ValueError:
        return anchor.replace(year=year, month=3, day=1)


def next_occurrence(anchor: date | datetime, recurring: bool, now: datetime) -> datetime:
    """
    The occurrence of an event to consider relative to ``now``.

    Recurring anchors are compared by calendar date only, so an event falling
    on today's month/day still counts as this year's occurrence.
    """
    anchor = as_instant(anchor)
    if not recurring:
        return anchor
    this_year = place_in_year(anchor, now.year)
    if this_year.date() >= now.date():
        return this_year
    return place_in_year(anchor, now.year + 1)


def days_until(occurrence: datetime, now: datetime) -> int:
    return math.ceil((occurrence - now) / ONE_DAY)


def project_upcoming(
    events: Iterable[Anchored], now: datetime, window_days: int
) -> list[Upcoming]:
    """Events occurring within ``window_days`` of ``now``, soonest first."""
    horizon = now + timedelta(days=window_days)
    upcoming: list[Upcoming] = []
    for event in events:
        occurrence = next_occurrence(event.date, event.recurring, now)
        if occurrence > horizon:
            continue
        if not event.recurring and occurrence < now:
            continue
        upcoming.append(Upcoming(event, occurrence, days_until(occurrence, now)))
    # list.sort is stable, so ties keep their input order.
    upcoming.sort(key=lambda item: item.days_until)
    return upcoming


def get_upcoming_milestones(
    db: DbClient, user_id: str, now: datetime, window_days: int = 30
) -> list[Upcoming]:
    """Upcoming milestones across every family ``user_id`` belongs to."""
    family_ids = db.list_family_ids(user_id)
    if not family_ids:
        return []
    return project_upcoming(
        db.list_milestones_for_families(family_ids), now, window_days
    )
