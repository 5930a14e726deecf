"""
Campaign, reaction and segment schemas.
"""
import uuid
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime
from pydantic import BaseModel

from edupartner.core.timezone import UtcDatetime
from edupartner.schemas.student import StudentResponse

ChannelLiteral = Literal["email", "sms"]
TrackedReactionLiteral = Literal["open", "click", "reply", "unsubscribe", "conversion"]


class CampaignCreate(BaseModel):
    """Create a new campaign (starts as draft)."""
    name: str
    description: Optional[str] = None
    channel: ChannelLiteral = "email"
    target_tags: Optional[List[str]] = []
    scheduled_start: Optional[UtcDatetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Engineering open day invite",
                "channel": "email",
                "target_tags": ["engineering", "fall-intake"],
                "scheduled_start": "2026-11-02T09:00:00"
            }
        }


class CampaignUpdate(BaseModel):
    """Update a draft or planned campaign."""
    name: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[ChannelLiteral] = None
    target_tags: Optional[List[str]] = None
    scheduled_start: Optional[UtcDatetime] = None


class CampaignResponse(BaseModel):
    """Campaign response."""
    id: uuid.UUID
    name: str
    description: Optional[str]
    channel: str
    status: str
    target_tags: List[str]
    scheduled_start: Optional[datetime]
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    cancelled_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LaunchResponse(BaseModel):
    """Outcome of launching a campaign."""
    campaign: CampaignResponse
    processed: int
    failed: int
    reverted: bool


class ReactionCreate(BaseModel):
    """Track a student reaction to a campaign."""
    student_id: uuid.UUID
    type: TrackedReactionLiteral
    occurred_at: Optional[UtcDatetime] = None
    detail: Optional[str] = None


class ReactionResponse(BaseModel):
    """Reaction response."""
    id: uuid.UUID
    campaign_id: uuid.UUID
    student_id: uuid.UUID
    type: str
    occurred_at: datetime
    detail: Optional[str]

    class Config:
        from_attributes = True


class CampaignStats(BaseModel):
    """Campaign statistics."""
    campaign_id: uuid.UUID
    status: str
    reached: int
    reactions_by_type: Dict[str, int]
    conversion_rate: float
    started_at: Optional[datetime]
    completed_at: Optional[datetime]


class SegmentPreviewRequest(BaseModel):
    """Raw criteria; validated by the segmentation engine so unknown keys are reported."""
    criteria: Dict[str, Any] = {}


class SegmentPreviewResponse(BaseModel):
    """Students matching a criteria set."""
    total: int
    items: List[StudentResponse]
