"""
Partner directory models - partner institutions and their agreements.
"""
import uuid
from datetime import datetime, date
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB

from edupartner.core.timezone import utc_now


class PartnerInstitution(SQLModel, table=True):
    """
    A school, college or university we cooperate with.
    """
    __tablename__ = "partner_institution"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(index=True)
    type: str = Field(default="university", index=True)  # university, college, school, language_center, other
    description: Optional[str] = None

    # Location
    country: str = Field(index=True)
    city: Optional[str] = Field(default=None, index=True)

    # Contact
    website: Optional[str] = None
    contact_email: Optional[str] = None

    status: str = Field(default="active", index=True)  # active, inactive
    tags: List[str] = Field(default=[], sa_column=Column(JSONB))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Agreement(SQLModel, table=True):
    """
    Inter-institutional agreement with a partner.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    partner_id: uuid.UUID = Field(foreign_key="partner_institution.id", index=True)

    title: str
    type: str = Field(index=True)  # exchange, dual_degree, articulation, research, recruitment
    status: str = Field(default="draft", index=True)  # draft, active, expired, terminated

    start_date: Optional[date] = None
    end_date: Optional[date] = Field(default=None, index=True)
    terms: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class AgreementStatus:
    DRAFT = "draft"
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"

    ALL = (DRAFT, ACTIVE, EXPIRED, TERMINATED)
