"""
Database abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    String,
    UniqueConstraint,
    create_engine,
    delete,
    func,
    select,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from hearth.types import (
    ChallengeStatus,
    ChallengeType,
    FamilyRole,
    FastingStatus,
    MilestoneType,
)

LOG_KEY = ("challenge_id", "user_id", "date")


class DbClient(Protocol):
    """Interface for database access."""

    # Family membership is owned by an external service; we only read it.
    def add_family_member(
        self, family_id: str, user_id: str, role: FamilyRole = FamilyRole.MEMBER
    ) -> "FamilyMemberRecord":
        ...

    def get_family_member(
        self, family_id: str, user_id: str
    ) -> Optional["FamilyMemberRecord"]:
        ...

    def list_family_ids(self, user_id: str) -> list[str]:
        ...

    def create_challenge(self, challenge: "ChallengeRecord") -> "ChallengeRecord":
        ...

    def get_challenge(self, challenge_id: str) -> Optional["ChallengeRecord"]:
        ...

    def list_family_challenges(self, family_id: str) -> list["ChallengeRecord"]:
        ...

    def update_challenge(
        self, challenge_id: str, changes: dict
    ) -> Optional["ChallengeRecord"]:
        ...

    def delete_challenge(self, challenge_id: str) -> None:
        ...

    def add_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional["ParticipantRecord"]:
        ...

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional["ParticipantRecord"]:
        ...

    def remove_participant(self, challenge_id: str, user_id: str) -> bool:
        ...

    def list_participants(self, challenge_id: str) -> list["ParticipantRecord"]:
        ...

    def count_participants(self, challenge_id: str) -> int:
        ...

    def upsert_log(
        self, challenge_id: str, user_id: str, log_date: date, fields: dict
    ) -> "DailyLogRecord":
        ...

    def list_logs(self, challenge_id: str, user_id: str) -> list["DailyLogRecord"]:
        ...

    def list_completed_log_dates(
        self, challenge_id: str, user_id: str
    ) -> list[date]:
        ...

    def count_completed_logs(self, challenge_id: str, user_id: str) -> int:
        ...

    def create_milestone(self, milestone: "MilestoneRecord") -> "MilestoneRecord":
        ...

    def get_milestone(self, milestone_id: str) -> Optional["MilestoneRecord"]:
        ...

    def list_family_milestones(self, family_id: str) -> list["MilestoneRecord"]:
        ...

    def list_milestones_for_families(
        self, family_ids: Iterable[str]
    ) -> list["MilestoneRecord"]:
        ...

    def update_milestone(
        self, milestone_id: str, changes: dict
    ) -> Optional["MilestoneRecord"]:
        ...

    def delete_milestone(self, milestone_id: str) -> None:
        ...


@dataclass
class FamilyMemberRecord:
    family_id: str
    user_id: str
    role: FamilyRole = FamilyRole.MEMBER


@dataclass
class ChallengeRecord:
    challenge_id: str
    family_id: str
    created_by_id: str
    name: str
    start_date: datetime
    end_date: datetime
    type: ChallengeType = ChallengeType.FASTING
    status: ChallengeStatus = ChallengeStatus.ACTIVE
    description: Optional[str] = None
    emoji: Optional[str] = None
    settings: Optional[dict] = None
    created_at: datetime = field(default_factory=datetime.now)

    def as_dict(self) -> dict:
        return {
            "challenge_id": self.challenge_id,
            "family_id": self.family_id,
            "created_by_id": self.created_by_id,
            "name": self.name,
            "description": self.description,
            "emoji": self.emoji,
            "type": self.type.value,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "settings": self.settings,
            "status": self.status.value,
            "created_at": self.created_at,
        }


@dataclass
class ParticipantRecord:
    participant_id: str
    challenge_id: str
    user_id: str
    status: str = "active"
    joined_at: datetime = field(default_factory=datetime.now)


@dataclass
class DailyLogRecord:
    log_id: str
    challenge_id: str
    user_id: str
    date: date
    completed: bool = False
    notes: Optional[str] = None
    fasting_status: Optional[FastingStatus] = None
    created_at: datetime = field(default_factory=datetime.now)

    def as_dict(self) -> dict:
        return {
            "log_id": self.log_id,
            "challenge_id": self.challenge_id,
            "user_id": self.user_id,
            "date": self.date,
            "completed": self.completed,
            "notes": self.notes,
            "fasting_status": (
                self.fasting_status.value if self.fasting_status else None
            ),
            "created_at": self.created_at,
        }


@dataclass
class MilestoneRecord:
    milestone_id: str
    family_id: str
    created_by_id: str
    title: str
    date: datetime
    type: MilestoneType = MilestoneType.CUSTOM
    recurring: bool = False
    description: Optional[str] = None
    emoji: Optional[str] = None
    person_name: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def as_dict(self) -> dict:
        return {
            "milestone_id": self.milestone_id,
            "family_id": self.family_id,
            "created_by_id": self.created_by_id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "type": self.type.value,
            "recurring": self.recurring,
            "emoji": self.emoji,
            "person_name": self.person_name,
            "created_at": self.created_at,
        }


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.members: Dict[tuple[str, str], FamilyMemberRecord] = {}
        self.challenges: Dict[str, ChallengeRecord] = {}
        self.participants: Dict[tuple[str, str], ParticipantRecord] = {}
        self.logs: Dict[tuple[str, str, date], DailyLogRecord] = {}
        self.milestones: Dict[str, MilestoneRecord] = {}
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.members.clear()
            self.challenges.clear()
            self.participants.clear()
            self.logs.clear()
            self.milestones.clear()

    def add_family_member(
        self, family_id: str, user_id: str, role: FamilyRole = FamilyRole.MEMBER
    ) -> FamilyMemberRecord:
        record = FamilyMemberRecord(family_id=family_id, user_id=user_id, role=role)
        self.members[(family_id, user_id)] = record
        return record

    def get_family_member(
        self, family_id: str, user_id: str
    ) -> Optional[FamilyMemberRecord]:
        return self.members.get((family_id, user_id))

    def list_family_ids(self, user_id: str) -> list[str]:
        return [
            family_id for (family_id, member_id) in self.members if member_id == user_id
        ]

    def create_challenge(self, challenge: ChallengeRecord) -> ChallengeRecord:
        with self._lock:
            self.challenges[challenge.challenge_id] = challenge
            self._add_participant(challenge.challenge_id, challenge.created_by_id)
        return challenge

    def get_challenge(self, challenge_id: str) -> Optional[ChallengeRecord]:
        return self.challenges.get(challenge_id)

    def list_family_challenges(self, family_id: str) -> list[ChallengeRecord]:
        items = [c for c in self.challenges.values() if c.family_id == family_id]
        return sorted(items, key=lambda c: c.created_at, reverse=True)

    def update_challenge(
        self, challenge_id: str, changes: dict
    ) -> Optional[ChallengeRecord]:
        challenge = self.challenges.get(challenge_id)
        if not challenge:
            return None
        updated = replace(challenge, **changes)
        self.challenges[challenge_id] = updated
        return updated

    def delete_challenge(self, challenge_id: str) -> None:
        with self._lock:
            self.challenges.pop(challenge_id, None)
            for key in [k for k in self.participants if k[0] == challenge_id]:
                del self.participants[key]
            for key in [k for k in self.logs if k[0] == challenge_id]:
                del self.logs[key]

    def _add_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        key = (challenge_id, user_id)
        if key in self.participants:
            return None
        record = ParticipantRecord(
            participant_id=uuid.uuid4().hex,
            challenge_id=challenge_id,
            user_id=user_id,
        )
        self.participants[key] = record
        return record

    def add_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        with self._lock:
            return self._add_participant(challenge_id, user_id)

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        return self.participants.get((challenge_id, user_id))

    def remove_participant(self, challenge_id: str, user_id: str) -> bool:
        with self._lock:
            return self.participants.pop((challenge_id, user_id), None) is not None

    def list_participants(self, challenge_id: str) -> list[ParticipantRecord]:
        items = [p for p in self.participants.values() if p.challenge_id == challenge_id]
        return sorted(items, key=lambda p: p.joined_at)

    def count_participants(self, challenge_id: str) -> int:
        return len(self.list_participants(challenge_id))

    def upsert_log(
        self, challenge_id: str, user_id: str, log_date: date, fields: dict
    ) -> DailyLogRecord:
        key = (challenge_id, user_id, log_date)
        with self._lock:
            existing = self.logs.get(key)
            if existing:
                record = replace(existing, **fields)
            else:
                record = DailyLogRecord(
                    log_id=uuid.uuid4().hex,
                    challenge_id=challenge_id,
                    user_id=user_id,
                    date=log_date,
                    **fields,
                )
            self.logs[key] = record
            return record

    def list_logs(self, challenge_id: str, user_id: str) -> list[DailyLogRecord]:
        items = [
            log
            for (c_id, u_id, _), log in self.logs.items()
            if c_id == challenge_id and u_id == user_id
        ]
        return sorted(items, key=lambda log: log.date, reverse=True)

    def list_completed_log_dates(
        self, challenge_id: str, user_id: str
    ) -> list[date]:
        return [
            log.date for log in self.list_logs(challenge_id, user_id) if log.completed
        ]

    def count_completed_logs(self, challenge_id: str, user_id: str) -> int:
        return len(self.list_completed_log_dates(challenge_id, user_id))

    def create_milestone(self, milestone: MilestoneRecord) -> MilestoneRecord:
        self.milestones[milestone.milestone_id] = milestone
        return milestone

    def get_milestone(self, milestone_id: str) -> Optional[MilestoneRecord]:
        return self.milestones.get(milestone_id)

    def list_family_milestones(self, family_id: str) -> list[MilestoneRecord]:
        items = [m for m in self.milestones.values() if m.family_id == family_id]
        return sorted(items, key=lambda m: m.date)

    def list_milestones_for_families(
        self, family_ids: Iterable[str]
    ) -> list[MilestoneRecord]:
        wanted = set(family_ids)
        return [m for m in self.milestones.values() if m.family_id in wanted]

    def update_milestone(
        self, milestone_id: str, changes: dict
    ) -> Optional[MilestoneRecord]:
        milestone = self.milestones.get(milestone_id)
        if not milestone:
            return None
        updated = replace(milestone, **changes)
        self.milestones[milestone_id] = updated
        return updated

    def delete_milestone(self, milestone_id: str) -> None:
        self.milestones.pop(milestone_id, None)


class PostgresDbClient:
    """
    SQLAlchemy-backed client. Targets Postgres; SQLite URLs work for tests.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _insert(self, table):
        """Return a dialect insert that supports ON CONFLICT clauses."""
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            return postgresql.insert(table)
        if dialect == "sqlite":
            return sqlite.insert(table)
        raise NotImplementedError(f"Upserts are not supported on {dialect}")

    def _to_member_record(self, row: "FamilyMemberRow") -> FamilyMemberRecord:
        return FamilyMemberRecord(
            family_id=row.family_id,
            user_id=row.user_id,
            role=FamilyRole(row.role),
        )

    def _to_challenge_record(self, row: "ChallengeRow") -> ChallengeRecord:
        return ChallengeRecord(
            challenge_id=row.challenge_id,
            family_id=row.family_id,
            created_by_id=row.created_by_id,
            name=row.name,
            start_date=row.start_date,
            end_date=row.end_date,
            type=ChallengeType(row.type),
            status=ChallengeStatus(row.status),
            description=row.description,
            emoji=row.emoji,
            settings=row.settings,
            created_at=row.created_at,
        )

    def _to_participant_record(self, row: "ParticipantRow") -> ParticipantRecord:
        return ParticipantRecord(
            participant_id=row.participant_id,
            challenge_id=row.challenge_id,
            user_id=row.user_id,
            status=row.status,
            joined_at=row.joined_at,
        )

    def _to_log_record(self, row: "DailyLogRow") -> DailyLogRecord:
        return DailyLogRecord(
            log_id=row.log_id,
            challenge_id=row.challenge_id,
            user_id=row.user_id,
            date=row.date,
            completed=row.completed,
            notes=row.notes,
            fasting_status=(
                FastingStatus(row.fasting_status) if row.fasting_status else None
            ),
            created_at=row.created_at,
        )

    def _to_milestone_record(self, row: "MilestoneRow") -> MilestoneRecord:
        return MilestoneRecord(
            milestone_id=row.milestone_id,
            family_id=row.family_id,
            created_by_id=row.created_by_id,
            title=row.title,
            date=row.date,
            type=MilestoneType(row.type),
            recurring=row.recurring,
            description=row.description,
            emoji=row.emoji,
            person_name=row.person_name,
            created_at=row.created_at,
        )

    @staticmethod
    def _column_values(changes: dict) -> dict:
        """Convert enum values in a change set to their stored labels."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in changes.items()
        }

    def add_family_member(
        self, family_id: str, user_id: str, role: FamilyRole = FamilyRole.MEMBER
    ) -> FamilyMemberRecord:
        with self.Session() as session:
            row = session.get(FamilyMemberRow, (family_id, user_id))
            if row:
                row.role = role.value
            else:
                row = FamilyMemberRow(
                    family_id=family_id, user_id=user_id, role=role.value
                )
                session.add(row)
            session.commit()
            return self._to_member_record(row)

    def get_family_member(
        self, family_id: str, user_id: str
    ) -> Optional[FamilyMemberRecord]:
        with self.Session() as session:
            row = session.get(FamilyMemberRow, (family_id, user_id))
            return self._to_member_record(row) if row else None

    def list_family_ids(self, user_id: str) -> list[str]:
        with self.Session() as session:
            stmt = select(FamilyMemberRow.family_id).where(
                FamilyMemberRow.user_id == user_id
            )
            return list(session.execute(stmt).scalars())

    def create_challenge(self, challenge: ChallengeRecord) -> ChallengeRecord:
        with self.Session() as session:
            session.add(
                ChallengeRow(**self._column_values(challenge.as_dict()))
            )
            session.add(
                ParticipantRow(
                    participant_id=uuid.uuid4().hex,
                    challenge_id=challenge.challenge_id,
                    user_id=challenge.created_by_id,
                    status="active",
                    joined_at=challenge.created_at,
                )
            )
            session.commit()
        return challenge

    def get_challenge(self, challenge_id: str) -> Optional[ChallengeRecord]:
        with self.Session() as session:
            row = session.get(ChallengeRow, challenge_id)
            return self._to_challenge_record(row) if row else None

    def list_family_challenges(self, family_id: str) -> list[ChallengeRecord]:
        with self.Session() as session:
            stmt = (
                select(ChallengeRow)
                .where(ChallengeRow.family_id == family_id)
                .order_by(ChallengeRow.created_at.desc())
            )
            return [
                self._to_challenge_record(row)
                for row in session.execute(stmt).scalars()
            ]

    def update_challenge(
        self, challenge_id: str, changes: dict
    ) -> Optional[ChallengeRecord]:
        with self.Session() as session:
            row = session.get(ChallengeRow, challenge_id)
            if not row:
                return None
            for key, value in self._column_values(changes).items():
                setattr(row, key, value)
            session.commit()
            return self._to_challenge_record(row)

    def delete_challenge(self, challenge_id: str) -> None:
        with self.Session() as session:
            session.execute(
                delete(DailyLogRow).where(DailyLogRow.challenge_id == challenge_id)
            )
            session.execute(
                delete(ParticipantRow).where(
                    ParticipantRow.challenge_id == challenge_id
                )
            )
            session.execute(
                delete(ChallengeRow).where(ChallengeRow.challenge_id == challenge_id)
            )
            session.commit()

    def add_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        stmt = (
            self._insert(ParticipantRow)
            .values(
                participant_id=uuid.uuid4().hex,
                challenge_id=challenge_id,
                user_id=user_id,
                status="active",
                joined_at=datetime.now(),
            )
            .on_conflict_do_nothing(index_elements=["challenge_id", "user_id"])
        )
        with self.Session() as session:
            result = session.execute(stmt)
            session.commit()
            if not result.rowcount:
                return None
        return self.get_participant(challenge_id, user_id)

    def get_participant(
        self, challenge_id: str, user_id: str
    ) -> Optional[ParticipantRecord]:
        with self.Session() as session:
            stmt = select(ParticipantRow).where(
                ParticipantRow.challenge_id == challenge_id,
                ParticipantRow.user_id == user_id,
            )
            row = session.execute(stmt).scalar_one_or_none()
            return self._to_participant_record(row) if row else None

    def remove_participant(self, challenge_id: str, user_id: str) -> bool:
        with self.Session() as session:
            result = session.execute(
                delete(ParticipantRow).where(
                    ParticipantRow.challenge_id == challenge_id,
                    ParticipantRow.user_id == user_id,
                )
            )
            session.commit()
            return bool(result.rowcount)

    def list_participants(self, challenge_id: str) -> list[ParticipantRecord]:
        with self.Session() as session:
            stmt = (
                select(ParticipantRow)
                .where(ParticipantRow.challenge_id == challenge_id)
                .order_by(ParticipantRow.joined_at.asc())
            )
            return [
                self._to_participant_record(row)
                for row in session.execute(stmt).scalars()
            ]

    def count_participants(self, challenge_id: str) -> int:
        with self.Session() as session:
            stmt = select(func.count()).select_from(ParticipantRow).where(
                ParticipantRow.challenge_id == challenge_id
            )
            return session.execute(stmt).scalar_one()

    def upsert_log(
        self, challenge_id: str, user_id: str, log_date: date, fields: dict
    ) -> DailyLogRecord:
        updates = self._column_values(fields)
        stmt = self._insert(DailyLogRow).values(
            log_id=uuid.uuid4().hex,
            challenge_id=challenge_id,
            user_id=user_id,
            date=log_date,
            completed=updates.get("completed", False),
            notes=updates.get("notes"),
            fasting_status=updates.get("fasting_status"),
            created_at=datetime.now(),
        )
        if updates:
            stmt = stmt.on_conflict_do_update(index_elements=list(LOG_KEY), set_=updates)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(LOG_KEY))
        with self.Session() as session:
            session.execute(stmt)
            session.commit()
            row = session.execute(
                select(DailyLogRow).where(
                    DailyLogRow.challenge_id == challenge_id,
                    DailyLogRow.user_id == user_id,
                    DailyLogRow.date == log_date,
                )
            ).scalar_one()
            return self._to_log_record(row)

    def list_logs(self, challenge_id: str, user_id: str) -> list[DailyLogRecord]:
        with self.Session() as session:
            stmt = (
                select(DailyLogRow)
                .where(
                    DailyLogRow.challenge_id == challenge_id,
                    DailyLogRow.user_id == user_id,
                )
                .order_by(DailyLogRow.date.desc())
            )
            return [self._to_log_record(row) for row in session.execute(stmt).scalars()]

    def list_completed_log_dates(
        self, challenge_id: str, user_id: str
    ) -> list[date]:
        with self.Session() as session:
            stmt = (
                select(DailyLogRow.date)
                .where(
                    DailyLogRow.challenge_id == challenge_id,
                    DailyLogRow.user_id == user_id,
                    DailyLogRow.completed.is_(True),
                )
                .order_by(DailyLogRow.date.desc())
            )
            return list(session.execute(stmt).scalars())

    def count_completed_logs(self, challenge_id: str, user_id: str) -> int:
        with self.Session() as session:
            stmt = select(func.count()).select_from(DailyLogRow).where(
                DailyLogRow.challenge_id == challenge_id,
                DailyLogRow.user_id == user_id,
                DailyLogRow.completed.is_(True),
            )
            return session.execute(stmt).scalar_one()

    def create_milestone(self, milestone: MilestoneRecord) -> MilestoneRecord:
        with self.Session() as session:
            session.add(MilestoneRow(**self._column_values(milestone.as_dict())))
            session.commit()
        return milestone

    def get_milestone(self, milestone_id: str) -> Optional[MilestoneRecord]:
        with self.Session() as session:
            row = session.get(MilestoneRow, milestone_id)
            return self._to_milestone_record(row) if row else None

    def list_family_milestones(self, family_id: str) -> list[MilestoneRecord]:
        with self.Session() as session:
            stmt = (
                select(MilestoneRow)
                .where(MilestoneRow.family_id == family_id)
                .order_by(MilestoneRow.date.asc())
            )
            return [
                self._to_milestone_record(row)
                for row in session.execute(stmt).scalars()
            ]

    def list_milestones_for_families(
        self, family_ids: Iterable[str]
    ) -> list[MilestoneRecord]:
        family_ids = list(family_ids)
        if not family_ids:
            return []
        with self.Session() as session:
            stmt = select(MilestoneRow).where(MilestoneRow.family_id.in_(family_ids))
            return [
                self._to_milestone_record(row)
                for row in session.execute(stmt).scalars()
            ]

    def update_milestone(
        self, milestone_id: str, changes: dict
    ) -> Optional[MilestoneRecord]:
        with self.Session() as session:
            row = session.get(MilestoneRow, milestone_id)
            if not row:
                return None
            for key, value in self._column_values(changes).items():
                setattr(row, key, value)
            session.commit()
            return self._to_milestone_record(row)

    def delete_milestone(self, milestone_id: str) -> None:
        with self.Session() as session:
            session.execute(
                delete(MilestoneRow).where(MilestoneRow.milestone_id == milestone_id)
            )
            session.commit()


Base = declarative_base()


class FamilyMemberRow(Base):
    __tablename__ = "family_members"

    family_id = Column(String, primary_key=True)
    user_id = Column(String, primary_key=True, index=True)
    role = Column(String, nullable=False, default=FamilyRole.MEMBER.value)


class ChallengeRow(Base):
    __tablename__ = "challenges"

    challenge_id = Column(String, primary_key=True)
    family_id = Column(String, nullable=False, index=True)
    created_by_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    emoji = Column(String, nullable=True)
    type = Column(String, nullable=False, default=ChallengeType.FASTING.value)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    settings = Column(JSON, nullable=True)
    status = Column(String, nullable=False, default=ChallengeStatus.ACTIVE.value)
    created_at = Column(DateTime, nullable=False)


class ParticipantRow(Base):
    __tablename__ = "challenge_participants"
    __table_args__ = (UniqueConstraint("challenge_id", "user_id"),)

    participant_id = Column(String, primary_key=True)
    challenge_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active")
    joined_at = Column(DateTime, nullable=False)


class DailyLogRow(Base):
    __tablename__ = "challenge_logs"
    __table_args__ = (UniqueConstraint(*LOG_KEY),)

    log_id = Column(String, primary_key=True)
    challenge_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    notes = Column(String, nullable=True)
    fasting_status = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)


class MilestoneRow(Base):
    __tablename__ = "milestones"

    milestone_id = Column(String, primary_key=True)
    family_id = Column(String, nullable=False, index=True)
    created_by_id = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    date = Column(DateTime, nullable=False)
    type = Column(String, nullable=False, default=MilestoneType.CUSTOM.value)
    recurring = Column(Boolean, nullable=False, default=False)
    emoji = Column(String, nullable=True)
    person_name = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)
