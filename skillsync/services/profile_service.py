"""
Public Profile Service

Builds the read-only profile shown at /p/{user_id}. A profile exists only
while the user's goal row has is_public set; otherwise callers get None and
the route answers 404 without revealing whether the user exists.
"""

from typing import Dict, List, Optional

from skillsync.db.schema import SKILL_TYPES
from skillsync.services.mongo_service import CareerGuidanceRecordService
from skillsync.services.postgres_service import (
    CourseService, ExtractedSkillService, UserGoalService
)


def group_skills(skills: List[dict]) -> Dict[str, Dict[str, List[str]]]:
    """
    type -> category -> unique skill names, in first-seen order.

    Example:
        {"technical": {"Programming": ["Python", "SQL"]}, "soft": {}, "transferable": {}}
    """
    grouped = {skill_type: {} for skill_type in SKILL_TYPES}
    for skill in skills:
        by_category = grouped.setdefault(skill["type"], {})
        names = by_category.setdefault(skill.get("category") or "General", [])
        if skill["name"] not in names:
            names.append(skill["name"])
    return grouped


class PublicProfileService:

    def __init__(self):
        self.goals = UserGoalService()
        self.skills = ExtractedSkillService()
        self.courses = CourseService()
        self.guidance = CareerGuidanceRecordService()

    def get_public_profile(self, user_id: int) -> Optional[dict]:
        goal = self.goals.get(user_id)
        if not goal or not goal["is_public"]:
            return None

        skills = self.skills.list_for_owner(user_id, newest_first=False)
        grouped = group_skills(skills)
        guidance = self.guidance.get(user_id) or {}

        return {
            "user_id": user_id,
            "career_goal": goal.get("career_goal"),
            "skill_goal": goal.get("skill_goal"),
            "current_study": goal.get("current_study"),
            "education_level": goal.get("education_level"),
            "skill_counts": {
                skill_type: sum(1 for s in skills if s["type"] == skill_type)
                for skill_type in SKILL_TYPES
            },
            "skills_by_type": grouped,
            "readiness_score": guidance.get("readiness_score"),
            "guidance_summary": guidance.get("summary"),
            "strengths": guidance.get("strengths", []),
            "completed_courses": self.courses.completed_names(user_id)
        }


def get_profile_service() -> PublicProfileService:
    return PublicProfileService()
