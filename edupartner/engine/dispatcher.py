"""
Campaign dispatch and lifecycle.

Every status change goes through CampaignStore.save_campaign_status, a
conditional write that only succeeds while the stored status still equals
the one we read. Two concurrent launches of the same planned campaign
therefore produce exactly one running transition and one delivery pass;
the loser gets InvalidStateTransitionError.
"""
import logging
import uuid
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel

from edupartner.core.exceptions import InvalidStateTransitionError
from edupartner.engine.ports import CampaignStore, DeliveryProvider
from edupartner.engine.segmentation import Criteria, SegmentationEngine, segmentation_engine
from edupartner.models.campaign import Campaign, CampaignStatus
from edupartner.models.reaction import Reaction, ReactionType

logger = logging.getLogger(__name__)

TRANSITIONS: Dict[str, FrozenSet[str]] = {
    CampaignStatus.DRAFT: frozenset({CampaignStatus.PLANNED, CampaignStatus.CANCELLED}),
    CampaignStatus.PLANNED: frozenset({CampaignStatus.RUNNING, CampaignStatus.CANCELLED}),
    CampaignStatus.RUNNING: frozenset({CampaignStatus.COMPLETED}),
    CampaignStatus.COMPLETED: frozenset(),
    CampaignStatus.CANCELLED: frozenset(),
}


class DispatchResult(BaseModel):
    """Outcome of one launch."""
    campaign_id: uuid.UUID
    processed: int
    failed: int = 0
    reverted: bool = False

    @property
    def targets(self) -> int:
        return self.processed + self.failed


class CampaignDispatcher:
    """Moves campaigns through their lifecycle and records simulated deliveries."""

    def __init__(
        self,
        store: CampaignStore,
        delivery: Optional[DeliveryProvider] = None,
        segmentation: Optional[SegmentationEngine] = None
    ):
        self.store = store
        self.delivery = delivery
        self.segmentation = segmentation or segmentation_engine

    async def _transition(self, campaign_id: uuid.UUID, target: str, now: datetime) -> Campaign:
        campaign = await self.store.load_campaign(campaign_id)
        current = campaign.status

        if target not in TRANSITIONS.get(current, frozenset()):
            raise InvalidStateTransitionError("campaign", current, target)

        if not await self.store.save_campaign_status(campaign_id, current, target, now):
            latest = await self.store.load_campaign(campaign_id)
            logger.warning(
                f"Campaign {campaign_id} changed concurrently "
                f"({current} -> {latest.status}), refusing {target}"
            )
            raise InvalidStateTransitionError("campaign", latest.status, target)

        return await self.store.load_campaign(campaign_id)

    async def plan(self, campaign_id: uuid.UUID, now: datetime) -> Campaign:
        return await self._transition(campaign_id, CampaignStatus.PLANNED, now)

    async def cancel(self, campaign_id: uuid.UUID, now: datetime) -> Campaign:
        return await self._transition(campaign_id, CampaignStatus.CANCELLED, now)

    async def complete(self, campaign_id: uuid.UUID, now: datetime) -> Campaign:
        return await self._transition(campaign_id, CampaignStatus.COMPLETED, now)

    async def launch(self, campaign_id: uuid.UUID, now: datetime) -> DispatchResult:
        """
        Start a planned campaign and deliver it to its segment.

        Targets are the students holding every tag in campaign.target_tags.
        A target whose delivery or reaction write fails is logged and
        counted; the rest still go out. When no target succeeds the
        campaign is put back to planned.

        Raises:
            NotFoundError: campaign does not exist
            InvalidStateTransitionError: campaign is not planned, or another
                launch got there first
        """
        campaign = await self._transition(campaign_id, CampaignStatus.RUNNING, now)

        criteria = Criteria(tags=campaign.target_tags or None)
        population = await self.store.load_all_entities()
        targets = self.segmentation.segment(population, criteria)
        logger.info(f"Launching campaign {campaign_id} to {len(targets)} of {len(population)} students")

        channel = campaign.channel
        processed = 0
        failed = 0
        for student in targets:
            student_id = student.id
            try:
                if self.delivery:
                    await self.delivery.deliver(campaign, student)
                await self.store.append_reaction(Reaction(
                    campaign_id=campaign_id,
                    student_id=student_id,
                    type=ReactionType.OPEN,
                    occurred_at=now,
                    detail=f"{channel} delivery"
                ))
                processed += 1
            except Exception as e:
                failed += 1
                logger.error(f"Dispatch of campaign {campaign_id} to student {student_id} failed: {e}")

        reverted = False
        if processed == 0:
            reverted = await self.store.save_campaign_status(
                campaign_id, CampaignStatus.RUNNING, CampaignStatus.PLANNED, now
            )
            logger.warning(
                f"Campaign {campaign_id} reached no student ({failed} failures), "
                f"{'reverted to planned' if reverted else 'status changed meanwhile'}"
            )

        return DispatchResult(
            campaign_id=campaign_id,
            processed=processed,
            failed=failed,
            reverted=reverted
        )
