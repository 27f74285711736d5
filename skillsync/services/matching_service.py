"""
Job Description Matching

Compares the user's extracted skills with a pasted job description. The
model does the matching; this service only guards the inputs and
normalizes whatever comes back, so a sloppy reply never turns into an error.
"""

import logging

from skillsync.core.config import get_settings
from skillsync.core.errors import UpstreamError, ValidationFailed
from skillsync.services.ai_validation import validate_job_match
from skillsync.services.deepseek_client import extract_json, get_deepseek_client, DeepSeekClient
from skillsync.services.postgres_service import ExtractedSkillService

logger = logging.getLogger(__name__)


class JobMatchService:

    def __init__(self):
        self.settings = get_settings()
        self.ai_client: DeepSeekClient = get_deepseek_client()
        self.skills = ExtractedSkillService()

    def compare(self, owner_id: int, job_description: str) -> dict:
        """
        Score the user's skills against a job description.

        Returns:
            {"match_score": 0-100, "matched_skills": [...], "missing_skills": [...], "verdict": "..."}

        Raises:
            ValidationFailed: description too short or no skills (no AI call made)
            UpstreamError: the API call itself failed
        """
        description = (job_description or "").strip()
        minimum = self.settings.min_job_description_chars
        if len(description) < minimum:
            raise ValidationFailed(f"Please provide a job description (at least {minimum} characters)")

        skills = self.skills.list_for_owner(owner_id)
        if not skills:
            raise ValidationFailed("No skills found. Upload a document first to extract your skills.")

        skill_list = ", ".join(f"{s['name']} ({s['type']})" for s in skills)

        try:
            response = self.ai_client.compare_job(
                skill_list, description[:self.settings.max_job_description_chars]
            )
        except Exception as e:
            logger.error("Job match for user %s failed: %s", owner_id, e)
            raise UpstreamError("AI analysis failed. Please try again.")

        try:
            data = extract_json(response)
        except ValueError:
            logger.warning("Job match reply for user %s was not JSON; using defaults", owner_id)
            data = {}

        return validate_job_match(data)


def get_job_matcher() -> JobMatchService:
    return JobMatchService()
