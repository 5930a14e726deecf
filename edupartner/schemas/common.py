"""
Common schemas used across multiple endpoints.
"""
import uuid
from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str

    class Config:
        json_schema_extra = {"example": {"message": "Operation successful"}}


class NotificationResponse(BaseModel):
    """Notification response."""
    id: uuid.UUID
    kind: str
    title: str
    message: Optional[str]
    entity_type: Optional[str]
    entity_id: Optional[uuid.UUID]
    meta_data: Dict[str, Any]
    is_read: bool
    read_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class ScoreRefreshResponse(BaseModel):
    """Result of a score refresh run."""
    total: int
    updated: int
