"""
Partner institution and agreement schemas.
"""
import uuid
from typing import Optional, List, Literal
from datetime import datetime, date
from pydantic import BaseModel, EmailStr, model_validator

PartnerTypeLiteral = Literal["university", "college", "school", "language_center", "other"]
AgreementTypeLiteral = Literal["exchange", "dual_degree", "articulation", "research", "recruitment"]
AgreementStatusLiteral = Literal["draft", "active", "expired", "terminated"]


class PartnerCreate(BaseModel):
    """Create a partner institution."""
    name: str
    type: PartnerTypeLiteral = "university"
    description: Optional[str] = None
    country: str
    city: Optional[str] = None
    website: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    status: Literal["active", "inactive"] = "active"
    tags: Optional[List[str]] = []


class PartnerUpdate(BaseModel):
    """Update a partner institution."""
    name: Optional[str] = None
    type: Optional[PartnerTypeLiteral] = None
    description: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    website: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    status: Optional[Literal["active", "inactive"]] = None
    tags: Optional[List[str]] = None


class PartnerResponse(BaseModel):
    """Partner institution response."""
    id: uuid.UUID
    name: str
    type: str
    description: Optional[str]
    country: str
    city: Optional[str]
    website: Optional[str]
    contact_email: Optional[str]
    status: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PartnerFilter(BaseModel):
    """Partner filtering options."""
    country: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    search: Optional[str] = None  # Search in name and city


class AgreementCreate(BaseModel):
    """Create an agreement with a partner."""
    title: str
    type: AgreementTypeLiteral
    status: AgreementStatusLiteral = "draft"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    terms: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AgreementUpdate(BaseModel):
    """Update an agreement. Date order is re-checked against stored values."""
    title: Optional[str] = None
    type: Optional[AgreementTypeLiteral] = None
    status: Optional[AgreementStatusLiteral] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    terms: Optional[str] = None


class AgreementResponse(BaseModel):
    """Agreement response."""
    id: uuid.UUID
    partner_id: uuid.UUID
    title: str
    type: str
    status: str
    start_date: Optional[date]
    end_date: Optional[date]
    terms: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
