"""
SQL implementation of the engine persistence ports.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.exceptions import NotFoundError
from edupartner.engine.ports import CampaignStore, ScoreStore
from edupartner.models.campaign import Campaign
from edupartner.models.interaction import Interaction
from edupartner.models.reaction import Reaction
from edupartner.models.student import Student
from edupartner.repositories.campaign_repo import CampaignRepository
from edupartner.repositories.interaction_repo import InteractionRepository
from edupartner.repositories.reaction_repo import ReactionRepository
from edupartner.repositories.student_repo import StudentRepository


class SqlEngineStore(ScoreStore, CampaignStore):
    """Backs ScoreEngine write-back and CampaignDispatcher with one session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.student_repo = StudentRepository(session)
        self.interaction_repo = InteractionRepository(session)
        self.campaign_repo = CampaignRepository(session)
        self.reaction_repo = ReactionRepository(session)

    async def load_entity(self, student_id: uuid.UUID) -> Student:
        student = await self.student_repo.get(student_id)
        if not student:
            raise NotFoundError("Student", str(student_id))
        return student

    async def load_all_entities(self) -> List[Student]:
        return await self.student_repo.all()

    async def load_interactions(self, student_id: uuid.UUID) -> List[Interaction]:
        return await self.interaction_repo.get_by_student(student_id)

    async def save_score(self, student_id: uuid.UUID, score: int) -> None:
        if not await self.student_repo.update_score(student_id, score):
            raise NotFoundError("Student", str(student_id))

    async def load_campaign(self, campaign_id: uuid.UUID) -> Campaign:
        campaign = await self.campaign_repo.get_fresh(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", str(campaign_id))
        return campaign

    async def save_campaign_status(
        self,
        campaign_id: uuid.UUID,
        expected_status: str,
        new_status: str,
        at: Optional[datetime] = None
    ) -> bool:
        return await self.campaign_repo.transition_status(campaign_id, expected_status, new_status, at)

    async def append_reaction(self, reaction: Reaction) -> Reaction:
        return await self.reaction_repo.append(reaction)
