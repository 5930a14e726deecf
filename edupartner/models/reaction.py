"""
Reaction model - audit trail of how students responded to a campaign.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from edupartner.core.timezone import utc_now


class Reaction(SQLModel, table=True):
    """
    A single student response to a campaign delivery.
    Append-only; both referenced rows must exist when it is written.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    campaign_id: uuid.UUID = Field(foreign_key="campaign.id", index=True)
    student_id: uuid.UUID = Field(foreign_key="student.id", index=True)

    type: str = Field(index=True)  # open, click, reply, unsubscribe, conversion
    occurred_at: datetime = Field(default_factory=utc_now)
    detail: Optional[str] = None


class ReactionType:
    OPEN = "open"
    CLICK = "click"
    REPLY = "reply"
    UNSUBSCRIBE = "unsubscribe"
    CONVERSION = "conversion"

    ALL = (OPEN, CLICK, REPLY, UNSUBSCRIBE, CONVERSION)
