"""
Campaign model - marketing campaigns aimed at a tagged student segment.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB

from edupartner.core.timezone import utc_now


class Campaign(SQLModel, table=True):
    """
    Campaign entity.
    Status only moves forward: draft -> planned -> running -> completed,
    with cancelled reachable from draft or planned.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Basic info
    name: str = Field(index=True)
    description: Optional[str] = None
    channel: str = Field(default="email")  # email, sms

    status: str = Field(default="draft", index=True)  # draft, planned, running, completed, cancelled

    # Target segment: students holding every one of these tags
    target_tags: List[str] = Field(default=[], sa_column=Column(JSONB))

    # Scheduling
    scheduled_start: Optional[datetime] = Field(default=None, index=True)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CampaignStatus:
    DRAFT = "draft"
    PLANNED = "planned"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = (DRAFT, PLANNED, RUNNING, COMPLETED, CANCELLED)
    EDITABLE = (DRAFT, PLANNED)
    DELETABLE = (DRAFT, CANCELLED)
