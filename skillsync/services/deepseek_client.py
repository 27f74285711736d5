"""
DeepSeek API Client

DeepSeek uses OpenAI-compatible API, so we use the openai library.

AI is used for exactly three prompt contracts:
- skill extraction from document text
- career readiness assessment
- job description matching

Each method returns the raw reply text. Callers decode it with extract_json
and check its shape in ai_validation.py, one validator per contract.
"""
import json
import logging
import re

from openai import OpenAI
from skillsync.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"```(?:json)?\n?")


def extract_json(text: str):
    """
    Extract JSON from an API reply.
    Handles cases where the model wraps JSON in markdown code blocks.
    Raises ValueError (json.JSONDecodeError) when nothing parses.
    """
    cleaned = CODE_FENCE.sub("", text or "").strip()
    return json.loads(cleaned)


class DeepSeekClient:
    """
    Wrapper for DeepSeek API with one method per prompt contract.
    """

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.deepseek_api_key,
            base_url=settings.deepseek_base_url
        )
        self.model = settings.deepseek_model

    def _call_api(
        self,
        system_prompt: str,
        user_content: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        json_mode: bool = False
    ) -> str:
        """
        Internal method to call DeepSeek API.
        Returns raw text response (may be empty).
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_content})

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs
        )
        return response.choices[0].message.content or ""

    def extract_skills(self, document_text: str) -> str:
        """
        Ask for the skills demonstrated in a document.
        Returns the raw reply; callers decide how to handle bad JSON.
        """
        system_prompt = (
            "You are a skill extraction assistant. Extract skills from academic "
            "documents and return them as JSON."
        )
        prompt = f"""Analyze the following coursework/document and extract skills, technologies, and competencies demonstrated by the student. Return a JSON array of skills with the following structure:
[
  {{
    "skillName": "skill name",
    "category": "category (e.g., Programming, Design, Communication)",
    "skillType": "technical | soft | transferable",
    "confidenceScore": 0.0-1.0,
    "evidenceText": "brief quote or summary from the document"
  }}
]

Document content:
{document_text}

Return only valid JSON array, no markdown formatting."""

        return self._call_api(system_prompt, prompt, max_tokens=2000)

    def generate_career_guidance(self, profile_text: str, skill_summary: str, skill_count: int) -> str:
        """Ask for a readiness assessment against the stated career goal."""
        system_prompt = (
            "You are a career intelligence advisor. Provide precise, actionable "
            "career guidance as JSON."
        )
        prompt = f"""You are a career intelligence advisor for students. Analyze the student's profile and provide actionable career guidance.

Student Profile:
{profile_text}

Extracted Skills ({skill_count} total):
{skill_summary}

Respond with a JSON object in this exact structure:
{{
  "readinessScore": <integer 0-100 representing career readiness for the stated goal>,
  "summary": "<2-3 sentence personalized assessment>",
  "strengths": ["<strength 1>", "<strength 2>", "<strength 3>"],
  "gaps": [
    {{ "skill": "<missing skill>", "importance": "high|medium|low", "suggestion": "<specific actionable step>" }}
  ],
  "recommendations": ["<actionable recommendation 1>", "<actionable recommendation 2>", "<actionable recommendation 3>"]
}}

Be specific, honest, and encouraging. Gaps and recommendations should be concrete and actionable. Return only valid JSON."""

        return self._call_api(system_prompt, prompt, max_tokens=1500)

    def compare_job(self, skill_list: str, job_description: str) -> str:
        """Ask how well a skill list matches a job description."""
        prompt = f"""You are a career advisor analysing how well a candidate's skills match a job description.

Candidate's skills: {skill_list}

Job Description:
{job_description}

Analyse the match and respond with a JSON object exactly like this (no markdown, no extra text):
{{
  "matchScore": <integer 0-100>,
  "matchedSkills": [<list of skills from candidate's list that are relevant to this job>],
  "missingSkills": [<important skills mentioned in the job description that the candidate lacks>],
  "verdict": "<2-3 sentence summary of how well the candidate fits, what's strong, and what to improve>"
}}"""

        return self._call_api("", prompt, max_tokens=800, json_mode=True)

    def test_connection(self) -> bool:
        """Test if DeepSeek API is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except Exception as e:
            logger.warning("DeepSeek connection failed: %s", e)
            return False


# Singleton instance
_deepseek_client: DeepSeekClient = None


def get_deepseek_client() -> DeepSeekClient:
    """Get or create DeepSeek client (singleton pattern)"""
    global _deepseek_client
    if _deepseek_client is None:
        _deepseek_client = DeepSeekClient()
    return _deepseek_client
