"""
Goal Routes

POST /onboarding - Save onboarding answers (once)
GET /goals - Get own goals
PUT /goals - Update provided goal fields
GET /dashboard - Summary for the home screen
GET /insights - Skill statistics and growth
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from skillsync.core.auth import get_current_user
from skillsync.services.insights_service import get_insights_service
from skillsync.services.postgres_service import UserGoalService
from skillsync.schemas.schemas import (
    DashboardResponse, InsightsResponse, UserGoalCreate, UserGoalResponse, UserGoalUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Goals"])


@router.post("/onboarding", response_model=UserGoalResponse, status_code=201)
async def complete_onboarding(data: UserGoalCreate, user: dict = Depends(get_current_user)):
    """Create goals. Use PUT /goals afterwards to change them."""
    goals = UserGoalService()
    if goals.get(user["user_id"]):
        raise HTTPException(status_code=400, detail="Onboarding already completed. Use PUT /goals to update.")

    goal = goals.create(user["user_id"], data.model_dump())
    logger.info("User %s completed onboarding", user["user_id"])
    return goal


@router.get("/goals", response_model=UserGoalResponse)
async def get_goals(user: dict = Depends(get_current_user)):
    goal = UserGoalService().get(user["user_id"])
    if not goal:
        raise HTTPException(status_code=404, detail="No goals found. Please complete onboarding first.")
    return goal


@router.put("/goals", response_model=UserGoalResponse)
async def update_goals(data: UserGoalUpdate, user: dict = Depends(get_current_user)):
    """Update goals. Only provided fields are updated."""
    values = data.model_dump(exclude_unset=True)
    if not values:
        raise HTTPException(status_code=400, detail="No fields to update")

    goals = UserGoalService()
    if not goals.update(user["user_id"], values):
        raise HTTPException(status_code=404, detail="No goals found. Please complete onboarding first.")
    return goals.get(user["user_id"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(user: dict = Depends(get_current_user)):
    """Users who haven't onboarded yet are sent to /onboarding."""
    goal = UserGoalService().get(user["user_id"])
    if not goal:
        return RedirectResponse(url="/onboarding", status_code=303)
    return get_insights_service().dashboard(user["user_id"], goal)


@router.get("/insights", response_model=InsightsResponse)
async def insights(user: dict = Depends(get_current_user)):
    return get_insights_service().insights(user["user_id"])
