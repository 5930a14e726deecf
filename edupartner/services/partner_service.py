"""
Partner service - partner directory and agreements.
"""
import logging
import uuid
from datetime import date
from typing import Optional, List

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.exceptions import raise_not_found, raise_validation_error
from edupartner.repositories.partner_repo import PartnerRepository, AgreementRepository
from edupartner.models.partner import PartnerInstitution, Agreement, AgreementStatus
from edupartner.models.notification import Kinds
from edupartner.schemas.partner import (
    PartnerCreate, PartnerUpdate, PartnerFilter, AgreementCreate, AgreementUpdate
)
from edupartner.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class PartnerService:
    """Service for partner institutions and their agreements."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.partner_repo = PartnerRepository(session)
        self.agreement_repo = AgreementRepository(session)
        self.notifications = NotificationService(session)

    # Partners

    async def create(self, partner_data: PartnerCreate) -> PartnerInstitution:
        data = partner_data.model_dump()
        data["tags"] = data.get("tags") or []
        return await self.partner_repo.create(data)

    async def get(self, partner_id: uuid.UUID) -> PartnerInstitution:
        partner = await self.partner_repo.get(partner_id)
        if not partner:
            raise_not_found("Partner", str(partner_id))
        return partner

    async def list(self, filters: Optional[PartnerFilter] = None, page: int = 1, limit: int = 20) -> dict:
        return await self.partner_repo.search(filters, page, limit)

    async def update(self, partner_id: uuid.UUID, partner_data: PartnerUpdate) -> PartnerInstitution:
        await self.get(partner_id)
        return await self.partner_repo.update(partner_id, partner_data.model_dump(exclude_unset=True))

    async def delete(self, partner_id: uuid.UUID) -> bool:
        """Delete a partner that has no agreements left."""
        await self.get(partner_id)
        if await self.agreement_repo.count({"partner_id": partner_id}):
            raise_validation_error("Delete the partner's agreements first")
        return await self.partner_repo.delete(partner_id)

    # Agreements

    async def create_agreement(self, partner_id: uuid.UUID, agreement_data: AgreementCreate) -> Agreement:
        await self.get(partner_id)
        data = agreement_data.model_dump()
        data["partner_id"] = partner_id
        return await self.agreement_repo.create(data)

    async def get_agreement(self, partner_id: uuid.UUID, agreement_id: uuid.UUID) -> Agreement:
        agreement = await self.agreement_repo.get(agreement_id)
        if not agreement or agreement.partner_id != partner_id:
            raise_not_found("Agreement", str(agreement_id))
        return agreement

    async def list_agreements(self, partner_id: uuid.UUID) -> List[Agreement]:
        await self.get(partner_id)
        return await self.agreement_repo.list_for_partner(partner_id)

    async def search_agreements(
        self,
        status: Optional[str] = None,
        expiring_before: Optional[date] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        return await self.agreement_repo.search(status, expiring_before, page, limit)

    async def update_agreement(
        self,
        partner_id: uuid.UUID,
        agreement_id: uuid.UUID,
        agreement_data: AgreementUpdate
    ) -> Agreement:
        agreement = await self.get_agreement(partner_id, agreement_id)
        update_data = agreement_data.model_dump(exclude_unset=True)

        start = update_data.get("start_date") or agreement.start_date
        end = update_data.get("end_date") or agreement.end_date
        if start and end and end < start:
            raise_validation_error("end_date must not be before start_date", "end_date")

        return await self.agreement_repo.update(agreement_id, update_data)

    async def delete_agreement(self, partner_id: uuid.UUID, agreement_id: uuid.UUID) -> bool:
        await self.get_agreement(partner_id, agreement_id)
        return await self.agreement_repo.delete(agreement_id)

    async def expire_agreements(self, today: Optional[date] = None) -> int:
        """Mark active agreements past their end date as expired."""
        today = today or date.today()
        expired = await self.agreement_repo.get_expired_active(today)

        for agreement in expired:
            await self.agreement_repo.update(agreement.id, {"status": AgreementStatus.EXPIRED})
            await self.notifications.notify(
                kind=Kinds.AGREEMENT_EXPIRING,
                title=f"Agreement '{agreement.title}' expired",
                message=f"Ended on {agreement.end_date.isoformat()}",
                entity_type="agreement",
                entity_id=agreement.id
            )

        if expired:
            logger.info(f"Expired {len(expired)} agreements")
        return len(expired)
