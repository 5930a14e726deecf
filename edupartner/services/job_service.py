"""
Job service - bodies of the periodic jobs.

Triggered by workers/scheduler.py or by an external scheduler through the
/api/jobs endpoints. Jobs receive `now` and never decide when they run.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.core.exceptions import EduPartnerException
from edupartner.engine.dispatcher import DispatchResult
from edupartner.models.notification import Kinds
from edupartner.repositories.campaign_repo import CampaignRepository
from edupartner.schemas.common import ScoreRefreshResponse
from edupartner.services.campaign_service import CampaignService
from edupartner.services.notification_service import NotificationService
from edupartner.services.partner_service import PartnerService
from edupartner.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)


class JobService:
    """Service for scheduled jobs."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.campaign_repo = CampaignRepository(session)
        self.campaign_service = CampaignService(session)
        self.scoring_service = ScoringService(session)
        self.partner_service = PartnerService(session)
        self.notifications = NotificationService(session)

    async def refresh_scores(self, now: Optional[datetime] = None) -> ScoreRefreshResponse:
        """Daily: recompute every engagement score."""
        now = now or utc_now()
        logger.info("Starting score refresh job...")
        result = await self.scoring_service.refresh_all(now)

        if result.updated:
            await self.notifications.notify(
                kind=Kinds.SCORES_REFRESHED,
                title="Engagement scores refreshed",
                message=f"{result.updated} of {result.total} scores changed",
                meta_data=result.model_dump()
            )
        return result

    async def launch_due_campaigns(self, now: Optional[datetime] = None) -> List[DispatchResult]:
        """Every 15 minutes: launch planned campaigns whose start time has come."""
        now = now or utc_now()
        due = await self.campaign_repo.get_due(now)
        logger.info(f"Found {len(due)} campaigns due for launch")

        results = []
        for campaign in due:
            try:
                results.append(await self.campaign_service.launch(campaign.id, now))
            except EduPartnerException as e:
                # another launcher got there first, or the campaign vanished
                logger.warning(f"Skipping campaign {campaign.id}: {e.message}")
        return results

    async def expire_agreements(self, now: Optional[datetime] = None) -> int:
        """Daily: close agreements whose end date has passed."""
        now = now or utc_now()
        return await self.partner_service.expire_agreements(now.date())
