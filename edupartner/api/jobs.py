"""
Job trigger routes for an external scheduler (cron, Cloud Scheduler...).
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.database import get_session
from edupartner.engine.dispatcher import DispatchResult
from edupartner.services.job_service import JobService
from edupartner.schemas.common import MessageResponse, ScoreRefreshResponse

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.post("/refresh-scores", response_model=ScoreRefreshResponse)
async def refresh_scores(session: AsyncSession = Depends(get_session)):
    """Recompute every engagement score."""
    return await JobService(session).refresh_scores()


@router.post("/launch-due-campaigns", response_model=List[DispatchResult])
async def launch_due_campaigns(session: AsyncSession = Depends(get_session)):
    """Launch planned campaigns whose scheduled start has passed."""
    return await JobService(session).launch_due_campaigns()


@router.post("/expire-agreements", response_model=MessageResponse)
async def expire_agreements(session: AsyncSession = Depends(get_session)):
    """Mark overdue active agreements as expired."""
    count = await JobService(session).expire_agreements()
    return MessageResponse(message=f"Expired {count} agreements")
