"""
Course Routes

GET /courses - List own courses
POST /courses - Add a course
PATCH /courses/{course_id} - Update provided fields
DELETE /courses/{course_id} - Remove a course
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from skillsync.core.auth import get_current_user
from skillsync.services.postgres_service import CourseService
from skillsync.schemas.schemas import CourseCreate, CourseResponse, CourseUpdate, MessageResponse

router = APIRouter(prefix="/courses", tags=["Courses"])


def _clean_tags(tags: List[str]) -> List[str]:
    return [tag.strip() for tag in tags if tag and tag.strip()]


@router.get("", response_model=List[CourseResponse])
async def list_courses(user: dict = Depends(get_current_user)):
    return CourseService().list_for_owner(user["user_id"])


@router.post("", response_model=CourseResponse, status_code=201)
async def create_course(data: CourseCreate, user: dict = Depends(get_current_user)):
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Course name is required")

    values = data.model_dump()
    values["name"] = name
    values["status"] = data.status.value
    values["skill_tags"] = _clean_tags(data.skill_tags)
    return CourseService().create(user["user_id"], values)


@router.patch("/{course_id}", response_model=CourseResponse)
async def update_course(course_id: int, data: CourseUpdate, user: dict = Depends(get_current_user)):
    """Update only the fields present in the request body."""
    values = data.model_dump(exclude_unset=True)

    if "name" in values:
        values["name"] = (values["name"] or "").strip()
        if not values["name"]:
            raise HTTPException(status_code=400, detail="Course name is required")
    if "status" in values:
        if values["status"] is None:
            raise HTTPException(status_code=400, detail="Course status is required")
        values["status"] = values["status"].value
    if "skill_tags" in values:
        values["skill_tags"] = _clean_tags(values["skill_tags"] or [])

    course = CourseService().update(course_id, user["user_id"], values)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(course_id: int, user: dict = Depends(get_current_user)):
    if not CourseService().delete(course_id, user["user_id"]):
        raise HTTPException(status_code=404, detail="Course not found")
    return MessageResponse(message="Course deleted")
