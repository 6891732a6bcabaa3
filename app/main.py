"""
ITS Application Portal - Main Application

FastAPI backend with:
- Public application form endpoint (validation, duplicate checks, scoring)
- Admin area (JWT) to list, filter and rank applications by region
- PostgreSQL in production, SQLite for local runs and tests

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.database import engine
from app.db.tables import init_schema

settings = get_settings()

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="ITS Application Portal",
    description="""
    Intake and ranking portal for IT support officer applications.

    ## Features
    - **Applications**: Public form submission with CXC subjects, certifications and experience
    - **Scoring**: Deterministic 0-100 suitability score per applicant
    - **Rankings**: Applicants ranked within each of the 11 regions
    - **Authentication**: JWT-based admin login
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables and the default admin on startup."""
    try:
        init_schema(engine)
    except Exception:
        logger.exception("Database schema initialization failed")
        raise


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "ITS Application Portal", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from app.db.database import test_database_connection

    return {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected"
    }
