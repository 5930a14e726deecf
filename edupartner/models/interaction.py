"""
Interaction model - append-only contact history of a student.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from edupartner.core.timezone import utc_now


class Interaction(SQLModel, table=True):
    """
    One touchpoint with a student (call, meeting, fair visit...).
    Rows are never updated; corrections are recorded as new interactions.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    student_id: uuid.UUID = Field(foreign_key="student.id", index=True)

    type: str = Field(index=True)  # email, call, meeting, event, document, inquiry, other
    occurred_at: datetime = Field(default_factory=utc_now, index=True)

    description: Optional[str] = None
    result: Optional[str] = None

    created_at: datetime = Field(default_factory=utc_now)


class InteractionType:
    EMAIL = "email"
    CALL = "call"
    MEETING = "meeting"
    EVENT = "event"
    DOCUMENT = "document"
    INQUIRY = "inquiry"
    OTHER = "other"

    ALL = (EMAIL, CALL, MEETING, EVENT, DOCUMENT, INQUIRY, OTHER)
