"""
Students API routes.
"""
import uuid
from typing import Optional, List
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from edupartner.database import get_session
from edupartner.services.student_service import StudentService
from edupartner.schemas.student import (
    StudentCreate, StudentUpdate, StudentResponse, StudentFilter,
    InteractionCreate, InteractionResponse, ScoreResponse
)

router = APIRouter(prefix="/api/students", tags=["students"])


@router.post("/", response_model=StudentResponse, status_code=201)
async def create_student(
    student_data: StudentCreate,
    session: AsyncSession = Depends(get_session)
):
    """Create a new student."""
    student_service = StudentService(session)
    return await student_service.create(student_data)


@router.get("/")
async def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    education_level: Optional[str] = None,
    country: Optional[str] = None,
    source: Optional[str] = None,
    partner_id: Optional[uuid.UUID] = None,
    min_score: Optional[int] = None,
    max_score: Optional[int] = None,
    tags: Optional[List[str]] = Query(None),
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session)
):
    """List students with filters. Repeated `tags` must all be present."""
    filters = StudentFilter(
        status=status,
        education_level=education_level,
        country=country,
        source=source,
        partner_id=partner_id,
        min_score=min_score,
        max_score=max_score,
        tags=tags,
        search=search
    )
    student_service = StudentService(session)
    return await student_service.list(filters, page, limit)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Get a student by ID."""
    student_service = StudentService(session)
    return await student_service.get(student_id)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: uuid.UUID,
    student_data: StudentUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Update a student."""
    student_service = StudentService(session)
    return await student_service.update(student_id, student_data)


@router.delete("/{student_id}", status_code=204)
async def delete_student(
    student_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Delete a student."""
    student_service = StudentService(session)
    await student_service.delete(student_id)


@router.post("/{student_id}/interactions", response_model=InteractionResponse, status_code=201)
async def record_interaction(
    student_id: uuid.UUID,
    interaction_data: InteractionCreate,
    session: AsyncSession = Depends(get_session)
):
    """Record an interaction; the student's score is refreshed right away."""
    student_service = StudentService(session)
    return await student_service.record_interaction(student_id, interaction_data)


@router.get("/{student_id}/interactions")
async def list_interactions(
    student_id: uuid.UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    session: AsyncSession = Depends(get_session)
):
    """Interaction history, newest first."""
    student_service = StudentService(session)
    return await student_service.list_interactions(student_id, page, limit)


@router.post("/{student_id}/score/recalculate", response_model=ScoreResponse)
async def recalculate_score(
    student_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Recompute the engagement score now."""
    student_service = StudentService(session)
    return await student_service.recalculate_score(student_id)
