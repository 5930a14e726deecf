"""
Notification model - staff inbox for campaign and scoring events.
"""
import uuid
from datetime import datetime
from typing import Optional, Dict, Any

from sqlmodel import SQLModel, Field
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB

from edupartner.core.timezone import utc_now


class Notification(SQLModel, table=True):
    """
    Inbox entry for admissions staff.
    Written by services whenever something noteworthy happens.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    kind: str = Field(index=True)  # see Kinds
    title: str
    message: Optional[str] = None

    # What the notification is about
    entity_type: Optional[str] = Field(default=None, index=True)  # student, campaign, agreement
    entity_id: Optional[uuid.UUID] = None

    meta_data: Dict[str, Any] = Field(default={}, sa_column=Column(JSONB))
    # Example: {"processed": 3, "failed": 0}

    is_read: bool = Field(default=False, index=True)
    read_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)


# Kind constants for consistency
class Kinds:
    CAMPAIGN_LAUNCHED = "campaign_launched"
    CAMPAIGN_LAUNCH_FAILED = "campaign_launch_failed"
    CAMPAIGN_COMPLETED = "campaign_completed"
    CAMPAIGN_CANCELLED = "campaign_cancelled"
    REACTION_RECEIVED = "reaction_received"
    SCORES_REFRESHED = "scores_refreshed"
    AGREEMENT_EXPIRING = "agreement_expiring"
