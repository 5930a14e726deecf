"""
Shared fixtures: fixed clock, model factories, an in-memory engine store
and a SQLite-backed session for the SQL repositories.
"""
import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import edupartner.models  # noqa: F401  registers every table
from edupartner.core.exceptions import NotFoundError
from edupartner.engine.ports import CampaignStore, ScoreStore
from edupartner.models.campaign import Campaign, CampaignStatus
from edupartner.models.interaction import Interaction
from edupartner.models.reaction import Reaction
from edupartner.models.student import Student
from edupartner.services.integrations.base import DeliveryProvider

NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def make_student(**overrides) -> Student:
    data = {
        "first_name": "Test",
        "last_name": "Student",
        "email": f"{uuid.uuid4().hex[:8]}@example.org",
        "status": "lead",
        "education_level": "bachelor",
        "country": "FR",
        "tags": [],
        "engagement_score": 0,
    }
    data.update(overrides)
    return Student(**data)


def make_interaction(type: str, days_ago: float, student_id: Optional[uuid.UUID] = None, now: datetime = NOW) -> Interaction:
    return Interaction(
        student_id=student_id or uuid.uuid4(),
        type=type,
        occurred_at=now - timedelta(days=days_ago),
    )


def make_campaign(**overrides) -> Campaign:
    data = {
        "name": "Open day",
        "channel": "email",
        "status": CampaignStatus.PLANNED,
        "target_tags": [],
    }
    data.update(overrides)
    return Campaign(**data)


class FakeStore(ScoreStore, CampaignStore):
    """
    In-memory store. save_campaign_status is a real compare-and-swap: it
    yields to the event loop first so concurrent callers interleave, then
    checks and writes under a lock.
    """

    def __init__(self, students: List[Student] = None, campaigns: List[Campaign] = None):
        self.students: Dict[uuid.UUID, Student] = {s.id: s for s in (students or [])}
        self.campaigns: Dict[uuid.UUID, Campaign] = {c.id: c for c in (campaigns or [])}
        self.interactions: Dict[uuid.UUID, List[Interaction]] = {}
        self.reactions: List[Reaction] = []
        self.status_writes: List[tuple] = []
        self.saved_scores: Dict[uuid.UUID, int] = {}
        self.fail_reaction_for: set = set()
        self._lock = asyncio.Lock()

    def add_interactions(self, student_id: uuid.UUID, interactions: List[Interaction]):
        self.interactions.setdefault(student_id, []).extend(interactions)

    async def load_entity(self, student_id):
        if student_id not in self.students:
            raise NotFoundError("Student", str(student_id))
        return self.students[student_id]

    async def load_all_entities(self):
        return list(self.students.values())

    async def load_interactions(self, student_id):
        return list(self.interactions.get(student_id, []))

    async def save_score(self, student_id, score):
        self.students[student_id].engagement_score = score
        self.saved_scores[student_id] = score

    async def load_campaign(self, campaign_id):
        if campaign_id not in self.campaigns:
            raise NotFoundError("Campaign", str(campaign_id))
        return self.campaigns[campaign_id]

    async def save_campaign_status(self, campaign_id, expected_status, new_status, at=None):
        await asyncio.sleep(0)
        async with self._lock:
            campaign = self.campaigns[campaign_id]
            if campaign.status != expected_status:
                return False
            campaign.status = new_status
            if new_status == CampaignStatus.RUNNING:
                campaign.started_at = at
            elif new_status == CampaignStatus.PLANNED:
                campaign.started_at = None
            elif new_status == CampaignStatus.COMPLETED:
                campaign.completed_at = at
            elif new_status == CampaignStatus.CANCELLED:
                campaign.cancelled_at = at
            self.status_writes.append((campaign_id, expected_status, new_status))
            return True

    async def append_reaction(self, reaction):
        if reaction.student_id in self.fail_reaction_for:
            raise RuntimeError("insert failed")
        assert reaction.campaign_id in self.campaigns
        assert reaction.student_id in self.students
        self.reactions.append(reaction)
        return reaction


class RecordingDelivery(DeliveryProvider):
    """Delivery fake that remembers who it sent to and can refuse some students."""

    def __init__(self, refuse: set = None):
        self.refuse = refuse or set()
        self.sent: List[uuid.UUID] = []

    async def deliver(self, campaign, student):
        if student.id in self.refuse:
            raise RuntimeError("gateway refused")
        self.sent.append(student.id)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def population() -> List[Student]:
    """Ten students; exactly three hold both 'engineering' and 'fall-intake'."""
    tagged = [
        make_student(first_name=f"Match{i}", tags=["engineering", "fall-intake"])
        for i in range(3)
    ]
    others = [
        make_student(first_name="Eng", tags=["engineering"]),
        make_student(first_name="Fall", tags=["fall-intake"]),
        make_student(first_name="Med", tags=["medicine", "fall-intake"]),
        make_student(first_name="None1", tags=[]),
        make_student(first_name="None2", tags=[]),
        make_student(first_name="Law", tags=["law"]),
        make_student(first_name="EngSpring", tags=["engineering", "spring-intake"]),
    ]
    return tagged + others


@compiles(JSONB, "sqlite")
def _jsonb_on_sqlite(type_, compiler, **kw):
    return "JSON"


@pytest_asyncio.fixture
async def db_session():
    """
    AsyncSession on an in-memory SQLite database with every table created.
    Foreign keys are enforced and BEGIN is emitted explicitly so SAVEPOINTs work.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session
    await engine.dispose()
