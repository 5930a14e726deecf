"""
Campaign service - campaign management, dispatch and reaction tracking.
"""
import logging
import uuid
from typing import Optional, Any
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.core.exceptions import raise_not_found, raise_validation_error
from edupartner.engine.dispatcher import CampaignDispatcher, DispatchResult
from edupartner.engine.segmentation import Criteria, segmentation_engine
from edupartner.repositories.campaign_repo import CampaignRepository
from edupartner.repositories.reaction_repo import ReactionRepository
from edupartner.repositories.student_repo import StudentRepository
from edupartner.repositories.store import SqlEngineStore
from edupartner.models.campaign import Campaign, CampaignStatus
from edupartner.models.notification import Kinds
from edupartner.models.reaction import Reaction, ReactionType
from edupartner.schemas.campaign import (
    CampaignCreate, CampaignUpdate, CampaignStats, ReactionCreate, SegmentPreviewResponse
)
from edupartner.schemas.student import StudentResponse
from edupartner.services.integrations.base import DeliveryProvider
from edupartner.services.integrations.delivery import get_delivery_provider
from edupartner.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class CampaignService:
    """Service for campaign operations."""

    def __init__(self, session: AsyncSession, delivery: Optional[DeliveryProvider] = None):
        self.session = session
        self.campaign_repo = CampaignRepository(session)
        self.reaction_repo = ReactionRepository(session)
        self.student_repo = StudentRepository(session)
        self.notifications = NotificationService(session)
        self.dispatcher = CampaignDispatcher(
            SqlEngineStore(session),
            delivery=delivery or get_delivery_provider()
        )

    async def create(self, campaign_data: CampaignCreate) -> Campaign:
        """Create a new draft campaign."""
        data = campaign_data.model_dump()
        data["target_tags"] = data.get("target_tags") or []
        data["status"] = CampaignStatus.DRAFT
        campaign = await self.campaign_repo.create(data)
        logger.info(f"Campaign '{campaign.name}' created ({campaign.id})")
        return campaign

    async def get(self, campaign_id: uuid.UUID) -> Campaign:
        """Get a campaign by ID."""
        campaign = await self.campaign_repo.get(campaign_id)
        if not campaign:
            raise_not_found("Campaign", str(campaign_id))
        return campaign

    async def list(
        self,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List campaigns with optional status filter."""
        filters = {}
        if status:
            filters["status"] = status

        return await self.campaign_repo.list_paginated(
            filters=filters,
            page=page,
            limit=limit
        )

    async def update(self, campaign_id: uuid.UUID, campaign_data: CampaignUpdate) -> Campaign:
        """Update a campaign that has not started yet."""
        campaign = await self.get(campaign_id)

        if campaign.status not in CampaignStatus.EDITABLE:
            raise_validation_error(f"Cannot edit campaign in '{campaign.status}' status")

        update_data = campaign_data.model_dump(exclude_unset=True)
        return await self.campaign_repo.update(campaign_id, update_data)

    async def delete(self, campaign_id: uuid.UUID) -> bool:
        """Delete a campaign (draft/cancelled only)."""
        campaign = await self.get(campaign_id)

        if campaign.status not in CampaignStatus.DELETABLE:
            raise_validation_error("Can only delete draft or cancelled campaigns")

        return await self.campaign_repo.delete(campaign_id)

    async def plan(self, campaign_id: uuid.UUID, now: Optional[datetime] = None) -> Campaign:
        """Mark a draft campaign ready for launch."""
        return await self.dispatcher.plan(campaign_id, now or utc_now())

    async def launch(self, campaign_id: uuid.UUID, now: Optional[datetime] = None) -> DispatchResult:
        """Launch a planned campaign to its segment."""
        result = await self.dispatcher.launch(campaign_id, now or utc_now())
        campaign = await self.campaign_repo.get_fresh(campaign_id)

        if result.processed:
            await self.notifications.notify(
                kind=Kinds.CAMPAIGN_LAUNCHED,
                title=f"Campaign '{campaign.name}' launched",
                message=f"Delivered to {result.processed} students, {result.failed} failed",
                entity_type="campaign",
                entity_id=campaign_id,
                meta_data={"processed": result.processed, "failed": result.failed}
            )
        else:
            # a reverted campaign is due again on the next scan; report it once per failure streak
            notified = await self.notifications.notify_once(
                kind=Kinds.CAMPAIGN_LAUNCH_FAILED,
                title=f"Campaign '{campaign.name}' reached nobody",
                message=f"{result.failed} deliveries failed; campaign is back to '{campaign.status}'",
                entity_type="campaign",
                entity_id=campaign_id,
                meta_data={"processed": 0, "failed": result.failed}
            )
            if not notified:
                logger.info(f"Campaign {campaign_id} still reaches nobody, notification already raised")
        return result

    async def complete(self, campaign_id: uuid.UUID, now: Optional[datetime] = None) -> Campaign:
        """Close a running campaign."""
        campaign = await self.dispatcher.complete(campaign_id, now or utc_now())
        await self.notifications.notify(
            kind=Kinds.CAMPAIGN_COMPLETED,
            title=f"Campaign '{campaign.name}' completed",
            entity_type="campaign",
            entity_id=campaign_id
        )
        return campaign

    async def cancel(self, campaign_id: uuid.UUID, now: Optional[datetime] = None) -> Campaign:
        """Cancel a campaign that has not started."""
        campaign = await self.dispatcher.cancel(campaign_id, now or utc_now())
        await self.notifications.notify(
            kind=Kinds.CAMPAIGN_CANCELLED,
            title=f"Campaign '{campaign.name}' cancelled",
            entity_type="campaign",
            entity_id=campaign_id
        )
        return campaign

    async def record_reaction(self, campaign_id: uuid.UUID, reaction_data: ReactionCreate) -> Reaction:
        """Track a student's reaction to a delivered campaign."""
        campaign = await self.get(campaign_id)
        if campaign.status not in (CampaignStatus.RUNNING, CampaignStatus.COMPLETED):
            raise_validation_error(f"Campaign in '{campaign.status}' status has not been delivered")

        student = await self.student_repo.get(reaction_data.student_id)
        if not student:
            raise_not_found("Student", str(reaction_data.student_id))

        reaction = await self.reaction_repo.append(Reaction(
            campaign_id=campaign_id,
            student_id=student.id,
            type=reaction_data.type,
            occurred_at=reaction_data.occurred_at or utc_now(),
            detail=reaction_data.detail
        ))

        if reaction.type in (ReactionType.REPLY, ReactionType.CONVERSION):
            await self.notifications.notify(
                kind=Kinds.REACTION_RECEIVED,
                title=f"{student.full_name}: {reaction.type} on '{campaign.name}'",
                message=reaction.detail,
                entity_type="student",
                entity_id=student.id,
                meta_data={"campaign_id": str(campaign_id)}
            )
        return reaction

    async def list_reactions(
        self,
        campaign_id: uuid.UUID,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 50
    ) -> dict:
        await self.get(campaign_id)
        return await self.reaction_repo.list_for_campaign(campaign_id, type, page, limit)

    async def get_stats(self, campaign_id: uuid.UUID) -> CampaignStats:
        """Get campaign statistics."""
        campaign = await self.get(campaign_id)
        counts = await self.reaction_repo.count_by_type(campaign_id)

        reached = counts.get(ReactionType.OPEN, 0)
        conversions = counts.get(ReactionType.CONVERSION, 0)
        return CampaignStats(
            campaign_id=campaign_id,
            status=campaign.status,
            reached=reached,
            reactions_by_type=counts,
            conversion_rate=round(conversions / reached, 4) if reached else 0.0,
            started_at=campaign.started_at,
            completed_at=campaign.completed_at
        )

    async def preview_segment(self, criteria: Any) -> SegmentPreviewResponse:
        """Students a criteria set would select, without touching anything."""
        parsed = Criteria.parse(criteria)
        population = await self.student_repo.all()
        matches = segmentation_engine.segment(population, parsed)
        return SegmentPreviewResponse(
            total=len(matches),
            items=[StudentResponse.model_validate(s) for s in matches]
        )
