"""
Student and interaction schemas.
"""
import uuid
from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, EmailStr

from edupartner.core.timezone import UtcDatetime

StudentStatusLiteral = Literal["lead", "prospect", "applicant", "enrolled", "alumni", "inactive"]
EducationLevelLiteral = Literal["high_school", "bachelor", "master", "doctorate", "other"]
InteractionTypeLiteral = Literal["email", "call", "meeting", "event", "document", "inquiry", "other"]


class StudentCreate(BaseModel):
    """Create a new student."""
    first_name: str
    last_name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    status: StudentStatusLiteral = "lead"
    education_level: Optional[EducationLevelLiteral] = None
    country: Optional[str] = None
    tags: Optional[List[str]] = []
    source: str = "manual"
    partner_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Amina",
                "last_name": "Diallo",
                "email": "amina.diallo@example.org",
                "status": "prospect",
                "education_level": "bachelor",
                "country": "SN",
                "tags": ["engineering", "fall-intake"]
            }
        }


class StudentUpdate(BaseModel):
    """Update an existing student. engagement_score is derived and not editable."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    status: Optional[StudentStatusLiteral] = None
    education_level: Optional[EducationLevelLiteral] = None
    country: Optional[str] = None
    tags: Optional[List[str]] = None
    source: Optional[str] = None
    partner_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None


class StudentResponse(BaseModel):
    """Student response."""
    id: uuid.UUID
    partner_id: Optional[uuid.UUID]
    first_name: str
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    status: str
    education_level: Optional[str]
    country: Optional[str]
    tags: List[str]
    engagement_score: int
    last_interaction_at: Optional[datetime]
    source: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentFilter(BaseModel):
    """Student filtering options."""
    status: Optional[str] = None
    education_level: Optional[str] = None
    country: Optional[str] = None
    source: Optional[str] = None
    partner_id: Optional[uuid.UUID] = None
    min_score: Optional[int] = None
    max_score: Optional[int] = None
    tags: Optional[List[str]] = None  # student must hold all of them
    search: Optional[str] = None  # Search in name and email


class InteractionCreate(BaseModel):
    """Record an interaction with a student."""
    type: InteractionTypeLiteral
    occurred_at: Optional[UtcDatetime] = None  # defaults to now
    description: Optional[str] = None
    result: Optional[str] = None


class InteractionResponse(BaseModel):
    """Interaction response."""
    id: uuid.UUID
    student_id: uuid.UUID
    type: str
    occurred_at: datetime
    description: Optional[str]
    result: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class ScoreResponse(BaseModel):
    """Result of scoring one student."""
    student_id: uuid.UUID
    previous_score: int
    engagement_score: int
    interactions: int
