"""
Notification repository.
"""
import uuid
from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import update

from edupartner.core.timezone import utc_now
from edupartner.models.notification import Notification
from edupartner.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Notification, session)

    async def notify(
        self,
        kind: str,
        title: str,
        message: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[uuid.UUID] = None,
        meta_data: Optional[dict] = None
    ) -> Notification:
        """Create a notification entry."""
        notification = Notification(
            kind=kind,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
            meta_data=meta_data or {}
        )
        self.session.add(notification)
        await self.session.commit()
        await self.session.refresh(notification)
        return notification

    async def latest_for(self, entity_type: str, entity_id: uuid.UUID) -> Optional[Notification]:
        """Most recent notification about one entity."""
        query = select(Notification).where(
            Notification.entity_type == entity_type,
            Notification.entity_id == entity_id
        ).order_by(Notification.created_at.desc()).limit(1)
        result = await self.session.exec(query)
        return result.first()

    async def list_recent(self, unread_only: bool = False, page: int = 1, limit: int = 20) -> dict:
        query = select(Notification)
        if unread_only:
            query = query.where(Notification.is_read == False)
        query = query.order_by(Notification.created_at.desc())
        return await self.paginate(query, page, limit)

    async def mark_all_read(self) -> int:
        """Mark every unread notification read; returns how many changed."""
        now = utc_now()
        stmt = (
            update(Notification)
            .where(Notification.is_read == False)
            .values(is_read=True, read_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
