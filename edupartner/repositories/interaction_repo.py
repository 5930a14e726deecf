"""
Interaction repository. Append and read only.
"""
import uuid
from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.models.interaction import Interaction
from edupartner.repositories.base import BaseRepository


class InteractionRepository(BaseRepository[Interaction]):
    """Repository for Interaction operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Interaction, session)

    async def get_by_student(self, student_id: uuid.UUID) -> List[Interaction]:
        """Full history of a student, oldest first."""
        query = select(Interaction).where(
            Interaction.student_id == student_id
        ).order_by(Interaction.occurred_at)
        result = await self.session.exec(query)
        return result.all()

    async def list_for_student(self, student_id: uuid.UUID, page: int = 1, limit: int = 50) -> dict:
        """Paginated history of a student, newest first."""
        query = select(Interaction).where(
            Interaction.student_id == student_id
        ).order_by(Interaction.occurred_at.desc())
        return await self.paginate(query, page, limit)
