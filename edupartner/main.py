"""
EduPartner Backend - FastAPI Application
Main entry point with all routes configured.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from edupartner.config import settings
from edupartner.database import init_db
from edupartner.core.exceptions import register_exception_handlers

# Import all API routers
from edupartner.api import students, campaigns, partners, notifications, jobs

# Import models to ensure they are registered with SQLModel
from edupartner.models import (
    PartnerInstitution, Agreement,
    Student, Interaction,
    Campaign, Reaction,
    Notification
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    await init_db()
    yield
    # Shutdown


app = FastAPI(
    title="EduPartner API",
    description="Partner institution directory and student recruitment CRM",
    version=VERSION,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include all routers
app.include_router(partners.router)
app.include_router(partners.agreements_router)
app.include_router(students.router)
app.include_router(campaigns.router)
app.include_router(notifications.router)
app.include_router(jobs.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "message": "EduPartner API is running",
        "version": VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "version": VERSION
    }
