"""
Notifications API routes.
"""
import uuid
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.database import get_session
from edupartner.services.notification_service import NotificationService
from edupartner.schemas.common import MessageResponse, NotificationResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/")
async def list_notifications(
    unread_only: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    session: AsyncSession = Depends(get_session)
):
    """List notifications, newest first."""
    return await NotificationService(session).list(unread_only, page, limit)


@router.post("/read-all", response_model=MessageResponse)
async def mark_all_read(session: AsyncSession = Depends(get_session)):
    """Mark every notification read."""
    count = await NotificationService(session).mark_all_read()
    return MessageResponse(message=f"Marked {count} notifications as read")


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Mark one notification read."""
    return await NotificationService(session).mark_read(notification_id)
