"""
SkillSync - Main Application

FastAPI backend with:
- PostgreSQL for accounts, documents, skills, goals and courses
- MongoDB for skill snapshots, career guidance and OTP codes
- DeepSeek AI for skill extraction, readiness scoring and job matching
- JWT authentication
- Uploaded files served from /files

Run: uvicorn skillsync.main:app --reload
"""

import logging
import os

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from skillsync import __version__
from skillsync.api.routes import api_router
from skillsync.core.config import get_settings
from skillsync.core.errors import (
    SkillSyncError, request_validation_handler, skillsync_error_handler
)
from skillsync.db.mongodb import init_mongo_indexes, test_mongo_connection
from skillsync.db.postgres import test_postgres_connection
from skillsync.db.schema import init_schema

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="SkillSync",
    description="""
    Turns uploaded documents into a tracked skill profile.

    ## Features
    - **Documents**: Upload CVs, transcripts and certificates; skills are extracted by AI
    - **Skills**: Technical, soft and transferable skills with evidence and confidence
    - **History**: A snapshot of the skill profile after every analysis
    - **Career Guidance**: AI readiness score against the onboarding career goal
    - **Job Match**: Compare skills with a pasted job description
    - **Courses & Goals**: Track learning and onboarding answers
    - **Public Profile**: Optional read-only page at /api/p/{user_id}

    ## Databases
    - PostgreSQL: users, documents, extracted_skills, user_goals, courses
    - MongoDB: skill_snapshots, career_guidance, otp_codes
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(SkillSyncError, skillsync_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Include API routes
app.include_router(api_router, prefix="/api")

# Stored uploads are public by URL
os.makedirs(settings.storage_dir, exist_ok=True)
app.mount("/files", StaticFiles(directory=settings.storage_dir), name="files")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create SQL tables and MongoDB indexes."""
    try:
        init_schema()
        logger.info("SQL schema initialized")
    except Exception as e:
        logger.error("SQL schema initialization failed: %s", e)

    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "SkillSync", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
