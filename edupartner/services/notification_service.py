"""
Notification service - staff inbox.
"""
import uuid
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.core.timezone import utc_now
from edupartner.core.exceptions import raise_not_found
from edupartner.repositories.notification_repo import NotificationRepository
from edupartner.models.notification import Notification


class NotificationService:
    """Service for notifications."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.notification_repo = NotificationRepository(session)

    async def notify(
        self,
        kind: str,
        title: str,
        message: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[uuid.UUID] = None,
        meta_data: Optional[dict] = None
    ) -> Notification:
        """Create a notification."""
        return await self.notification_repo.notify(
            kind=kind,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
            meta_data=meta_data
        )

    async def notify_once(
        self,
        kind: str,
        title: str,
        entity_type: str,
        entity_id: uuid.UUID,
        message: Optional[str] = None,
        meta_data: Optional[dict] = None
    ) -> Optional[Notification]:
        """
        Create a notification unless the latest one about the same entity
        already has this kind. Returns None when nothing was written.
        """
        latest = await self.notification_repo.latest_for(entity_type, entity_id)
        if latest and latest.kind == kind:
            return None
        return await self.notify(
            kind=kind,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
            meta_data=meta_data
        )

    async def list(self, unread_only: bool = False, page: int = 1, limit: int = 20) -> dict:
        return await self.notification_repo.list_recent(unread_only, page, limit)

    async def mark_read(self, notification_id: uuid.UUID) -> Notification:
        notification = await self.notification_repo.get(notification_id)
        if not notification:
            raise_not_found("Notification", str(notification_id))
        if notification.is_read:
            return notification
        return await self.notification_repo.update(
            notification_id, {"is_read": True, "read_at": utc_now()}
        )

    async def mark_all_read(self) -> int:
        return await self.notification_repo.mark_all_read()
