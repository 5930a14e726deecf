"""
Student service - student records and interaction history.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.core.exceptions import raise_not_found, raise_already_exists
from edupartner.repositories.student_repo import StudentRepository
from edupartner.repositories.interaction_repo import InteractionRepository
from edupartner.repositories.partner_repo import PartnerRepository
from edupartner.models.student import Student
from edupartner.models.interaction import Interaction
from edupartner.schemas.student import (
    StudentCreate, StudentUpdate, StudentFilter, InteractionCreate, ScoreResponse
)
from edupartner.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)


class StudentService:
    """Service for student operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.student_repo = StudentRepository(session)
        self.interaction_repo = InteractionRepository(session)
        self.partner_repo = PartnerRepository(session)
        self.scoring_service = ScoringService(session)

    async def _check_partner(self, partner_id: Optional[uuid.UUID]):
        if partner_id and not await self.partner_repo.get(partner_id):
            raise_not_found("Partner", str(partner_id))

    async def create(self, student_data: StudentCreate) -> Student:
        """Create a new student."""
        if student_data.email:
            existing = await self.student_repo.get_by_email(student_data.email)
            if existing:
                raise_already_exists("Student", "email", student_data.email)
        await self._check_partner(student_data.partner_id)

        data = student_data.model_dump()
        data["tags"] = data.get("tags") or []
        student = await self.student_repo.create(data)
        logger.info(f"Created student {student.id}")
        return student

    async def get(self, student_id: uuid.UUID) -> Student:
        """Get a student by ID."""
        student = await self.student_repo.get(student_id)
        if not student:
            raise_not_found("Student", str(student_id))
        return student

    async def list(
        self,
        filters: Optional[StudentFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List students with filters."""
        return await self.student_repo.search(filters, page, limit)

    async def update(self, student_id: uuid.UUID, student_data: StudentUpdate) -> Student:
        """Update a student."""
        student = await self.get(student_id)

        update_data = student_data.model_dump(exclude_unset=True)
        if update_data.get("email") and update_data["email"] != student.email:
            existing = await self.student_repo.get_by_email(update_data["email"])
            if existing:
                raise_already_exists("Student", "email", update_data["email"])
        await self._check_partner(update_data.get("partner_id"))

        return await self.student_repo.update(student_id, update_data)

    async def delete(self, student_id: uuid.UUID) -> bool:
        """Delete a student."""
        await self.get(student_id)
        return await self.student_repo.delete(student_id)

    async def record_interaction(
        self,
        student_id: uuid.UUID,
        interaction_data: InteractionCreate,
        now: Optional[datetime] = None
    ) -> Interaction:
        """
        Append an interaction and refresh the student's score so the new
        contact is reflected immediately.
        """
        now = now or utc_now()
        await self.get(student_id)

        data = interaction_data.model_dump()
        data["student_id"] = student_id
        data["occurred_at"] = data.get("occurred_at") or now

        interaction = await self.interaction_repo.create(data)
        await self.student_repo.touch_interaction(student_id, interaction.occurred_at)
        result = await self.scoring_service.recalculate(student_id, now)
        logger.info(
            f"Recorded {interaction.type} for student {student_id}, "
            f"score {result.previous_score} -> {result.engagement_score}"
        )
        return interaction

    async def list_interactions(self, student_id: uuid.UUID, page: int = 1, limit: int = 50) -> dict:
        """Interaction history of a student."""
        await self.get(student_id)
        return await self.interaction_repo.list_for_student(student_id, page, limit)

    async def recalculate_score(self, student_id: uuid.UUID, now: Optional[datetime] = None) -> ScoreResponse:
        """Recompute and store a student's engagement score."""
        await self.get(student_id)
        return await self.scoring_service.recalculate(student_id, now)
