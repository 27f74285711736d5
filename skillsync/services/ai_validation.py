"""
AI Response Validation - one validator per prompt contract.

AI OUTPUT → VALIDATED HERE → STORED IN DATABASE
Nothing from the model reaches storage or the API without passing
through one of these functions.

- Skill extraction: strict. Wrong structure raises MalformedAIResponse.
- Career guidance: strict on structure and score, lenient on lists.
- Job match: never raises; every field is coerced to a safe default.
"""

import math
from typing import Any, List, Optional

from skillsync.core.errors import MalformedAIResponse
from skillsync.db.schema import SKILL_TYPES

GAP_IMPORTANCE = ("high", "medium", "low")
DEFAULT_SKILL_TYPE = "technical"
DEFAULT_GAP_IMPORTANCE = "medium"
# extracted_skills.skill_name and category are VARCHAR(255)
NAME_MAX_CHARS = 255


# ============================================================
# COERCION HELPERS
# ============================================================

def _clean_str(value: Any) -> Optional[str]:
    """Stripped string, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_number(value: Any) -> Optional[float]:
    """float(value) if it is a finite number, else None. Booleans don't count."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _string_list(value: Any) -> List[str]:
    """Non-empty strings from a list; anything that isn't a list becomes []."""
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


# ============================================================
# SKILL EXTRACTION CONTRACT
# ============================================================

def validate_extracted_skills(data: Any) -> List[dict]:
    """
    Validate the skill extraction reply.

    Expected: a JSON array of {skillName, category, skillType,
    confidenceScore, evidenceText}. All-or-nothing: one bad entry rejects
    the whole reply.
    """
    if not isinstance(data, list):
        raise MalformedAIResponse("Skill extraction reply is not a JSON array")

    validated = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise MalformedAIResponse(f"Skill entry {index} is not an object")

        skill_name = _clean_str(entry.get("skillName"))
        if not skill_name:
            raise MalformedAIResponse(f"Skill entry {index} has no skillName")

        skill_type = str(entry.get("skillType") or "").strip().lower()
        if skill_type not in SKILL_TYPES:
            skill_type = DEFAULT_SKILL_TYPE

        category = _clean_str(entry.get("category"))
        if category:
            category = category[:NAME_MAX_CHARS]

        confidence = _to_number(entry.get("confidenceScore"))
        if confidence is not None:
            confidence = clamp(confidence, 0.0, 1.0)

        validated.append({
            "skill_name": skill_name[:NAME_MAX_CHARS],
            "category": category,
            "skill_type": skill_type,
            "confidence_score": confidence,
            "evidence_text": _clean_str(entry.get("evidenceText"))
        })

    return validated


# ============================================================
# CAREER GUIDANCE CONTRACT
# ============================================================

def validate_career_guidance(data: Any) -> dict:
    """
    Validate the readiness assessment reply.

    readinessScore must be numeric; it is rounded and clamped to [0, 100].
    Missing lists become empty, unknown gap importance becomes "medium".
    """
    if not isinstance(data, dict):
        raise MalformedAIResponse("Career guidance reply is not a JSON object")

    score = _to_number(data.get("readinessScore"))
    if score is None:
        raise MalformedAIResponse("Career guidance reply has no numeric readinessScore")

    gaps = []
    raw_gaps = data.get("gaps")
    if isinstance(raw_gaps, list):
        for gap in raw_gaps:
            if not isinstance(gap, dict):
                continue
            skill = _clean_str(gap.get("skill"))
            if not skill:
                continue
            importance = str(gap.get("importance") or "").strip().lower()
            if importance not in GAP_IMPORTANCE:
                importance = DEFAULT_GAP_IMPORTANCE
            gaps.append({
                "skill": skill,
                "importance": importance,
                "suggestion": _clean_str(gap.get("suggestion")) or ""
            })

    return {
        "readiness_score": int(round(clamp(score, 0, 100))),
        "summary": _clean_str(data.get("summary")) or "",
        "strengths": _string_list(data.get("strengths")),
        "gaps": gaps,
        "recommendations": _string_list(data.get("recommendations"))
    }


# ============================================================
# JOB MATCH CONTRACT
# ============================================================

def validate_job_match(data: Any) -> dict:
    """
    Normalize the job match reply. Never raises: a reply of the wrong
    shape is treated as an empty object.
    """
    if not isinstance(data, dict):
        data = {}

    score = _to_number(data.get("matchScore"))
    if score is None:
        score = 0

    return {
        "match_score": int(round(clamp(score, 0, 100))),
        "matched_skills": _string_list(data.get("matchedSkills")),
        "missing_skills": _string_list(data.get("missingSkills")),
        "verdict": _clean_str(data.get("verdict")) or ""
    }
