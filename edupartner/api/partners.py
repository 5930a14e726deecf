"""
Partner directory API routes.
"""
import uuid
from datetime import date
from typing import Optional, List
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.database import get_session
from edupartner.services.partner_service import PartnerService
from edupartner.schemas.partner import (
    PartnerCreate, PartnerUpdate, PartnerResponse, PartnerFilter,
    AgreementCreate, AgreementUpdate, AgreementResponse
)

router = APIRouter(prefix="/api/partners", tags=["partners"])
agreements_router = APIRouter(prefix="/api/agreements", tags=["agreements"])


@router.post("/", response_model=PartnerResponse, status_code=201)
async def create_partner(
    partner_data: PartnerCreate,
    session: AsyncSession = Depends(get_session)
):
    """Add a partner institution."""
    return await PartnerService(session).create(partner_data)


@router.get("/")
async def list_partners(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    country: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    tags: Optional[List[str]] = Query(None),
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session)
):
    """Search the partner directory."""
    filters = PartnerFilter(country=country, type=type, status=status, tags=tags, search=search)
    return await PartnerService(session).list(filters, page, limit)


@router.get("/{partner_id}", response_model=PartnerResponse)
async def get_partner(
    partner_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).get(partner_id)


@router.patch("/{partner_id}", response_model=PartnerResponse)
async def update_partner(
    partner_id: uuid.UUID,
    partner_data: PartnerUpdate,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).update(partner_id, partner_data)


@router.delete("/{partner_id}", status_code=204)
async def delete_partner(
    partner_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Delete a partner without agreements."""
    await PartnerService(session).delete(partner_id)


@router.post("/{partner_id}/agreements", response_model=AgreementResponse, status_code=201)
async def create_agreement(
    partner_id: uuid.UUID,
    agreement_data: AgreementCreate,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).create_agreement(partner_id, agreement_data)


@router.get("/{partner_id}/agreements", response_model=List[AgreementResponse])
async def list_partner_agreements(
    partner_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).list_agreements(partner_id)


@router.get("/{partner_id}/agreements/{agreement_id}", response_model=AgreementResponse)
async def get_agreement(
    partner_id: uuid.UUID,
    agreement_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).get_agreement(partner_id, agreement_id)


@router.patch("/{partner_id}/agreements/{agreement_id}", response_model=AgreementResponse)
async def update_agreement(
    partner_id: uuid.UUID,
    agreement_id: uuid.UUID,
    agreement_data: AgreementUpdate,
    session: AsyncSession = Depends(get_session)
):
    return await PartnerService(session).update_agreement(partner_id, agreement_id, agreement_data)


@router.delete("/{partner_id}/agreements/{agreement_id}", status_code=204)
async def delete_agreement(
    partner_id: uuid.UUID,
    agreement_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    await PartnerService(session).delete_agreement(partner_id, agreement_id)


@agreements_router.get("/")
async def search_agreements(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    expiring_before: Optional[date] = None,
    session: AsyncSession = Depends(get_session)
):
    """Agreements across all partners, soonest ending first."""
    return await PartnerService(session).search_agreements(status, expiring_before, page, limit)
