"""
Partner directory repositories.
"""
import uuid
from typing import Optional, List
from datetime import date

from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.models.partner import PartnerInstitution, Agreement, AgreementStatus
from edupartner.repositories.base import BaseRepository
from edupartner.schemas.partner import PartnerFilter


class PartnerRepository(BaseRepository[PartnerInstitution]):
    """Repository for PartnerInstitution operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(PartnerInstitution, session)

    async def search(
        self,
        filters: Optional[PartnerFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Search partners with filtering."""
        query = select(PartnerInstitution)

        if filters:
            if filters.country:
                query = query.where(PartnerInstitution.country == filters.country)
            if filters.type:
                query = query.where(PartnerInstitution.type == filters.type)
            if filters.status:
                query = query.where(PartnerInstitution.status == filters.status)
            if filters.search:
                search_term = f"%{filters.search}%"
                query = query.where(
                    or_(
                        PartnerInstitution.name.ilike(search_term),
                        PartnerInstitution.city.ilike(search_term)
                    )
                )
            if filters.tags:
                for tag in filters.tags:
                    query = query.where(PartnerInstitution.tags.contains([tag]))

        query = query.order_by(PartnerInstitution.name)
        return await self.paginate(query, page, limit)


class AgreementRepository(BaseRepository[Agreement]):
    """Repository for Agreement operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Agreement, session)

    async def list_for_partner(self, partner_id: uuid.UUID) -> List[Agreement]:
        return await self.list({"partner_id": partner_id}, order_by="start_date")

    async def search(
        self,
        status: Optional[str] = None,
        expiring_before: Optional[date] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Agreements across all partners, soonest ending first."""
        query = select(Agreement)
        if status:
            query = query.where(Agreement.status == status)
        if expiring_before:
            query = query.where(Agreement.end_date <= expiring_before)
        query = query.order_by(Agreement.end_date)
        return await self.paginate(query, page, limit)

    async def get_expired_active(self, today: date) -> List[Agreement]:
        """Active agreements whose end date has passed."""
        query = select(Agreement).where(
            Agreement.status == AgreementStatus.ACTIVE,
            Agreement.end_date < today
        )
        result = await self.session.exec(query)
        return result.all()
