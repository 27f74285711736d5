"""
Career Guidance & Job Match Routes

GET /career-guidance - Latest readiness assessment (null if none yet)
POST /career-guidance - Generate a fresh assessment with DeepSeek
POST /compare - Match own skills against a job description
"""

from typing import Optional

from fastapi import APIRouter, Depends

from skillsync.core.auth import get_current_user
from skillsync.services.guidance_service import get_readiness_scorer
from skillsync.services.matching_service import get_job_matcher
from skillsync.schemas.schemas import CareerGuidanceResponse, CompareRequest, JobMatchResponse

router = APIRouter(tags=["Career Guidance"])


@router.get("/career-guidance", response_model=Optional[CareerGuidanceResponse])
async def get_career_guidance(user: dict = Depends(get_current_user)):
    return get_readiness_scorer().get(user["user_id"])


@router.post("/career-guidance", response_model=CareerGuidanceResponse)
def generate_career_guidance(user: dict = Depends(get_current_user)):
    """
    Score readiness for the onboarding career goal.

    Requires a career goal and at least one extracted skill. Replaces any
    earlier assessment.
    """
    return get_readiness_scorer().generate(user["user_id"])


@router.post("/compare", response_model=JobMatchResponse)
def compare_job(request: CompareRequest, user: dict = Depends(get_current_user)):
    """
    Compare extracted skills with a pasted job description
    (at least 20 characters).
    """
    return get_job_matcher().compare(user["user_id"], request.job_description)
