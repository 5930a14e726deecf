"""
Student model - prospective and enrolled students tracked by the CRM.
Carries the segmentation attributes and the stored engagement score.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB

from edupartner.core.timezone import utc_now


class Student(SQLModel, table=True):
    """
    Student entity - a lead moving through the admissions funnel.
    engagement_score is derived from the interaction history and written
    back by the scoring service, never edited by hand.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    partner_id: Optional[uuid.UUID] = Field(default=None, foreign_key="partner_institution.id", index=True)

    # Basic info
    first_name: str = Field(index=True)
    last_name: str = Field(index=True)
    email: Optional[str] = Field(default=None, index=True)
    phone: Optional[str] = None

    # Segmentation attributes
    status: str = Field(default="lead", index=True)  # lead, prospect, applicant, enrolled, alumni, inactive
    education_level: Optional[str] = Field(default=None, index=True)  # high_school, bachelor, master, doctorate, other
    country: Optional[str] = Field(default=None, index=True)
    tags: List[str] = Field(default=[], sa_column=Column(JSONB))

    # Engagement
    engagement_score: int = Field(default=0, index=True)
    last_interaction_at: Optional[datetime] = None

    # Source tracking
    source: str = Field(default="manual", index=True)  # manual, fair, website, referral, partner, import

    notes: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class StudentStatus:
    LEAD = "lead"
    PROSPECT = "prospect"
    APPLICANT = "applicant"
    ENROLLED = "enrolled"
    ALUMNI = "alumni"
    INACTIVE = "inactive"

    ALL = (LEAD, PROSPECT, APPLICANT, ENROLLED, ALUMNI, INACTIVE)


class EducationLevel:
    HIGH_SCHOOL = "high_school"
    BACHELOR = "bachelor"
    MASTER = "master"
    DOCTORATE = "doctorate"
    OTHER = "other"

    ALL = (HIGH_SCHOOL, BACHELOR, MASTER, DOCTORATE, OTHER)
