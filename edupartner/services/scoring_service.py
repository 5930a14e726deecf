"""
Scoring service - engagement score recomputation and write-back.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.engine.ports import ScoreStore
from edupartner.engine.scoring import ScoreEngine, score_engine
from edupartner.repositories.store import SqlEngineStore
from edupartner.schemas.common import ScoreRefreshResponse
from edupartner.schemas.student import ScoreResponse

logger = logging.getLogger(__name__)


class ScoringService:
    """Service for scoring operations."""

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        store: Optional[ScoreStore] = None,
        engine: Optional[ScoreEngine] = None
    ):
        self.store = store or SqlEngineStore(session)
        self.engine = engine or score_engine

    async def recalculate(self, student_id: uuid.UUID, now: Optional[datetime] = None) -> ScoreResponse:
        """Recompute one student's score and save it."""
        now = now or utc_now()
        student = await self.store.load_entity(student_id)
        interactions = await self.store.load_interactions(student_id)

        previous = student.engagement_score
        score = self.engine.compute_score(interactions, now)
        if score != previous:
            await self.store.save_score(student_id, score)

        return ScoreResponse(
            student_id=student_id,
            previous_score=previous,
            engagement_score=score,
            interactions=len(interactions)
        )

    async def refresh_all(self, now: Optional[datetime] = None) -> ScoreRefreshResponse:
        """
        Recompute every student's score. Scores decay with time even without
        new interactions, so this runs on a daily cadence.
        """
        now = now or utc_now()
        students = await self.store.load_all_entities()

        updated = 0
        for student in students:
            interactions = await self.store.load_interactions(student.id)
            score = self.engine.compute_score(interactions, now)
            if score != student.engagement_score:
                await self.store.save_score(student.id, score)
                updated += 1

        logger.info(f"Score refresh: {updated} of {len(students)} students changed")
        return ScoreRefreshResponse(total=len(students), updated=updated)
