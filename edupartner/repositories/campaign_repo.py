"""
Campaign repository.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import update

from edupartner.core.timezone import utc_now
from edupartner.models.campaign import Campaign, CampaignStatus
from edupartner.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    """Repository for Campaign operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Campaign, session)

    async def get_fresh(self, campaign_id: uuid.UUID) -> Optional[Campaign]:
        """Get a campaign, bypassing whatever the session has cached."""
        return await self.session.get(Campaign, campaign_id, populate_existing=True)

    async def transition_status(
        self,
        campaign_id: uuid.UUID,
        expected_status: str,
        new_status: str,
        at: Optional[datetime] = None
    ) -> bool:
        """
        Conditionally change status in one statement:
        UPDATE campaign SET status=:new ... WHERE id=:id AND status=:expected

        Returns True only if this call performed the change.
        """
        at = at or utc_now()
        values = {"status": new_status, "updated_at": at}

        # Set appropriate timestamp based on status
        if new_status == CampaignStatus.RUNNING:
            values["started_at"] = at
        elif new_status == CampaignStatus.COMPLETED:
            values["completed_at"] = at
        elif new_status == CampaignStatus.CANCELLED:
            values["cancelled_at"] = at
        elif new_status == CampaignStatus.PLANNED and expected_status == CampaignStatus.RUNNING:
            values["started_at"] = None

        stmt = (
            update(Campaign)
            .where(Campaign.id == campaign_id, Campaign.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def get_due(self, now: datetime) -> List[Campaign]:
        """Planned campaigns whose scheduled start has passed."""
        query = select(Campaign).where(
            Campaign.status == CampaignStatus.PLANNED,
            Campaign.scheduled_start <= now
        ).order_by(Campaign.scheduled_start)
        result = await self.session.exec(query)
        return result.all()

    async def count_by_status(self, status: str) -> int:
        """Count campaigns by status."""
        return await self.count({"status": status})
