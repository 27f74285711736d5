"""
Skill Routes

GET /skills - Own extracted skills, optionally filtered by type
GET /skill-history - Skill snapshots, oldest first
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from skillsync.core.auth import get_current_user
from skillsync.services.postgres_service import ExtractedSkillService
from skillsync.services.snapshot_service import get_snapshot_aggregator
from skillsync.schemas.schemas import SkillResponse, SkillSnapshotResponse, SkillType

router = APIRouter(tags=["Skills"])


@router.get("/skills", response_model=List[SkillResponse])
async def list_skills(
    skill_type: Optional[SkillType] = Query(None, alias="type"),
    user: dict = Depends(get_current_user)
):
    """Skills are created only by document analysis, newest first."""
    return ExtractedSkillService().list_for_owner(
        user["user_id"], skill_type=skill_type.value if skill_type else None
    )


@router.get("/skill-history", response_model=List[SkillSnapshotResponse])
async def skill_history(user: dict = Depends(get_current_user)):
    return get_snapshot_aggregator().timeline(user["user_id"])
