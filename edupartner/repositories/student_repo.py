"""
Student repository with search and score write-back.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.models.student import Student
from edupartner.repositories.base import BaseRepository
from edupartner.schemas.student import StudentFilter


class StudentRepository(BaseRepository[Student]):
    """Repository for Student operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Student, session)

    async def search(
        self,
        filters: Optional[StudentFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Search students with advanced filtering."""
        query = select(Student)

        if filters:
            if filters.status:
                query = query.where(Student.status == filters.status)
            if filters.education_level:
                query = query.where(Student.education_level == filters.education_level)
            if filters.country:
                query = query.where(Student.country == filters.country)
            if filters.source:
                query = query.where(Student.source == filters.source)
            if filters.partner_id:
                query = query.where(Student.partner_id == filters.partner_id)
            if filters.min_score is not None:
                query = query.where(Student.engagement_score >= filters.min_score)
            if filters.max_score is not None:
                query = query.where(Student.engagement_score <= filters.max_score)
            if filters.search:
                search_term = f"%{filters.search}%"
                query = query.where(
                    or_(
                        Student.first_name.ilike(search_term),
                        Student.last_name.ilike(search_term),
                        Student.email.ilike(search_term)
                    )
                )
            if filters.tags:
                for tag in filters.tags:
                    query = query.where(Student.tags.contains([tag]))

        query = query.order_by(Student.created_at.desc())
        return await self.paginate(query, page, limit)

    async def get_by_email(self, email: str) -> Optional[Student]:
        """Get student by email (for deduplication)."""
        result = await self.session.exec(select(Student).where(Student.email == email))
        return result.first()

    async def all(self) -> List[Student]:
        """Whole population, oldest first, for scoring and segmentation."""
        result = await self.session.exec(select(Student).order_by(Student.created_at))
        return result.all()

    async def update_score(self, student_id: uuid.UUID, score: int) -> bool:
        """Write back a computed engagement score."""
        student = await self.get(student_id)
        if student:
            student.engagement_score = score
            student.updated_at = utc_now()
            self.session.add(student)
            await self.session.commit()
            return True
        return False

    async def touch_interaction(self, student_id: uuid.UUID, occurred_at: datetime) -> None:
        """Keep last_interaction_at at the newest interaction seen."""
        student = await self.get(student_id)
        if student and (student.last_interaction_at is None or occurred_at > student.last_interaction_at):
            student.last_interaction_at = occurred_at
            self.session.add(student)
            await self.session.commit()
