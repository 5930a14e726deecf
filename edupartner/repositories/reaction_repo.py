"""
Reaction repository.
"""
import uuid
from typing import Dict

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func

from edupartner.models.reaction import Reaction, ReactionType
from edupartner.repositories.base import BaseRepository


class ReactionRepository(BaseRepository[Reaction]):
    """Repository for Reaction operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Reaction, session)

    async def append(self, reaction: Reaction) -> Reaction:
        """
        Persist a reaction.

        The insert runs inside a SAVEPOINT: if it fails only that savepoint
        is rolled back, and the students and campaign already loaded in the
        session stay usable for the rest of a dispatch loop.
        """
        async with self.session.begin_nested():
            self.session.add(reaction)
        await self.session.commit()
        await self.session.refresh(reaction)
        return reaction

    async def list_for_campaign(
        self,
        campaign_id: uuid.UUID,
        type: str = None,
        page: int = 1,
        limit: int = 50
    ) -> dict:
        """Paginated reactions of a campaign, newest first."""
        query = select(Reaction).where(Reaction.campaign_id == campaign_id)
        if type:
            query = query.where(Reaction.type == type)
        query = query.order_by(Reaction.occurred_at.desc())
        return await self.paginate(query, page, limit)

    async def count_by_type(self, campaign_id: uuid.UUID) -> Dict[str, int]:
        """Reaction counts per type; every known type is present."""
        query = select(Reaction.type, func.count()).where(
            Reaction.campaign_id == campaign_id
        ).group_by(Reaction.type)
        result = await self.session.exec(query)

        counts = {t: 0 for t in ReactionType.ALL}
        for reaction_type, count in result.all():
            counts[reaction_type] = count
        return counts
