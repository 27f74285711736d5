"""
Career Readiness Scoring

Sends the user's full skill set and onboarding answers to DeepSeek and
stores the returned assessment as the user's only career_guidance record.
Regenerating replaces it; no history is kept.
"""

import logging
from typing import List, Optional

from skillsync.core.errors import PreconditionFailed, UpstreamError
from skillsync.services.ai_validation import validate_career_guidance
from skillsync.services.deepseek_client import extract_json, get_deepseek_client, DeepSeekClient
from skillsync.services.mongo_service import CareerGuidanceRecordService
from skillsync.services.postgres_service import ExtractedSkillService, UserGoalService

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"


def summarize_skills(skills: List[dict]) -> str:
    """One line per skill: name, type, category and confidence percentage."""
    lines = []
    for skill in skills:
        confidence = skill.get("confidence")
        if confidence is None:
            confidence = 0.5
        percent = int(confidence * 100 + 0.5)
        category = skill.get("category") or "General"
        lines.append(f"- {skill['name']} ({skill['type']}, {category}, confidence: {percent}%)")
    return "\n".join(lines)


def describe_profile(goal: dict) -> str:
    def field(name):
        value = goal.get(name)
        return value if value else NOT_SPECIFIED

    return "\n".join([
        f"- Career Goal: {goal['career_goal']}",
        f"- Current Study: {field('current_study')}",
        f"- Education Level: {field('education_level')}",
        f"- Year of Study: {field('study_year')}",
        f"- Current Courses: {field('courses')}",
        f"- Top Priority: {field('top_priority')}",
    ])


class ReadinessScoringService:

    def __init__(self):
        self.ai_client: DeepSeekClient = get_deepseek_client()
        self.goals = UserGoalService()
        self.skills = ExtractedSkillService()
        self.guidance = CareerGuidanceRecordService()

    def get(self, owner_id: int) -> Optional[dict]:
        return self.guidance.get(owner_id)

    def generate(self, owner_id: int) -> dict:
        """
        Produce and store a fresh readiness assessment.

        Raises:
            PreconditionFailed: no career goal, or no skills yet (no AI call made)
            UpstreamError: the model failed or replied with something unusable
        """
        goal = self.goals.get(owner_id)
        if not goal or not (goal.get("career_goal") or "").strip():
            raise PreconditionFailed("No career goal set. Please complete onboarding first.")

        skills = self.skills.list_for_owner(owner_id)
        if not skills:
            raise PreconditionFailed("No skills found. Please upload and analyze some documents first.")

        try:
            response = self.ai_client.generate_career_guidance(
                describe_profile(goal), summarize_skills(skills), len(skills)
            )
            if not response or not response.strip():
                raise UpstreamError("No response from AI")
            assessment = validate_career_guidance(extract_json(response))
        except UpstreamError:
            raise
        except Exception as e:
            logger.error("Career guidance for user %s failed: %s", owner_id, e)
            raise UpstreamError("Failed to generate guidance")

        record = self.guidance.upsert(owner_id, goal["career_goal"], assessment)
        logger.info("Career guidance for user %s: readiness %d", owner_id, assessment["readiness_score"])
        return record


def get_readiness_scorer() -> ReadinessScoringService:
    return ReadinessScoringService()
