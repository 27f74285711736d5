"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from skillsync.api.routes.auth_routes import router as auth_router
from skillsync.api.routes.document_routes import router as document_router
from skillsync.api.routes.skill_routes import router as skill_router
from skillsync.api.routes.course_routes import router as course_router
from skillsync.api.routes.guidance_routes import router as guidance_router
from skillsync.api.routes.goal_routes import router as goal_router
from skillsync.api.routes.profile_routes import router as profile_router

# Main API router
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(document_router)
api_router.include_router(skill_router)
api_router.include_router(course_router)
api_router.include_router(guidance_router)
api_router.include_router(goal_router)
api_router.include_router(profile_router)
