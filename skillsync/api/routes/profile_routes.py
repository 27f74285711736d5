"""
Public Profile Routes

POST /profile/visibility - Turn the public profile on or off
GET /p/{user_id} - Public profile (no auth)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from skillsync.core.auth import get_current_user
from skillsync.services.postgres_service import UserGoalService
from skillsync.services.profile_service import get_profile_service
from skillsync.schemas.schemas import PublicProfileResponse, VisibilityRequest, VisibilityResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public Profile"])


@router.post("/profile/visibility", response_model=VisibilityResponse)
async def set_visibility(request: VisibilityRequest, user: dict = Depends(get_current_user)):
    if not UserGoalService().set_public(user["user_id"], request.is_public):
        raise HTTPException(status_code=404, detail="Please complete onboarding first")

    logger.info("User %s set profile public=%s", user["user_id"], request.is_public)
    return VisibilityResponse(is_public=request.is_public)


@router.get("/p/{user_id}", response_model=PublicProfileResponse)
async def public_profile(user_id: int):
    """Read-only profile. 404 unless the owner made it public."""
    profile = get_profile_service().get_public_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
