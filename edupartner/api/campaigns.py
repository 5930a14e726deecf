"""
Campaigns API routes.
"""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.database import get_session
from edupartner.services.campaign_service import CampaignService
from edupartner.schemas.campaign import (
    CampaignCreate, CampaignUpdate, CampaignResponse, CampaignStats, LaunchResponse,
    ReactionCreate, ReactionResponse, SegmentPreviewRequest, SegmentPreviewResponse
)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.post("/", response_model=CampaignResponse, status_code=201)
async def create_campaign(
    campaign_data: CampaignCreate,
    session: AsyncSession = Depends(get_session)
):
    """Create a new draft campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.create(campaign_data)


@router.get("/")
async def list_campaigns(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    session: AsyncSession = Depends(get_session)
):
    """List campaigns with optional status filter."""
    campaign_service = CampaignService(session)
    return await campaign_service.list(status, page, limit)


@router.post("/segments/preview", response_model=SegmentPreviewResponse)
async def preview_segment(
    request: SegmentPreviewRequest,
    session: AsyncSession = Depends(get_session)
):
    """Show which students a criteria set selects."""
    campaign_service = CampaignService(session)
    return await campaign_service.preview_segment(request.criteria)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Get a campaign by ID."""
    campaign_service = CampaignService(session)
    return await campaign_service.get(campaign_id)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: uuid.UUID,
    campaign_data: CampaignUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Update a draft or planned campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.update(campaign_id, campaign_data)


@router.delete("/{campaign_id}", status_code=204)
async def delete_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Delete a campaign (draft/cancelled only)."""
    campaign_service = CampaignService(session)
    await campaign_service.delete(campaign_id)


@router.post("/{campaign_id}/plan", response_model=CampaignResponse)
async def plan_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Move a draft campaign to planned."""
    campaign_service = CampaignService(session)
    return await campaign_service.plan(campaign_id)


@router.post("/{campaign_id}/launch", response_model=LaunchResponse)
async def launch_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Launch a planned campaign now."""
    campaign_service = CampaignService(session)
    result = await campaign_service.launch(campaign_id)
    campaign = await campaign_service.get(campaign_id)
    return LaunchResponse(
        campaign=CampaignResponse.model_validate(campaign),
        processed=result.processed,
        failed=result.failed,
        reverted=result.reverted
    )


@router.post("/{campaign_id}/complete", response_model=CampaignResponse)
async def complete_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Close a running campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.complete(campaign_id)


@router.post("/{campaign_id}/cancel", response_model=CampaignResponse)
async def cancel_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Cancel a draft or planned campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.cancel(campaign_id)


@router.post("/{campaign_id}/reactions", response_model=ReactionResponse, status_code=201)
async def record_reaction(
    campaign_id: uuid.UUID,
    reaction_data: ReactionCreate,
    session: AsyncSession = Depends(get_session)
):
    """Track a student's reaction to a campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.record_reaction(campaign_id, reaction_data)


@router.get("/{campaign_id}/reactions")
async def list_reactions(
    campaign_id: uuid.UUID,
    type: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    session: AsyncSession = Depends(get_session)
):
    """List reactions of a campaign."""
    campaign_service = CampaignService(session)
    return await campaign_service.list_reactions(campaign_id, type, page, limit)


@router.get("/{campaign_id}/stats", response_model=CampaignStats)
async def get_campaign_stats(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Get campaign statistics."""
    campaign_service = CampaignService(session)
    return await campaign_service.get_stats(campaign_id)
