"""
Validation of decoded model replies, one section per prompt contract.
"""

import pytest

from skillsync.core.errors import MalformedAIResponse
from skillsync.services.ai_validation import (
    validate_career_guidance, validate_extracted_skills, validate_job_match
)
from skillsync.services.deepseek_client import extract_json


# ============================================================
# SKILL EXTRACTION
# ============================================================

def test_skill_defaults_and_clamping():
    skills = validate_extracted_skills([
        {"skillName": "  Python ", "skillType": "TECHNICAL", "confidenceScore": 1.7},
        {"skillName": "Teamwork", "skillType": "people", "confidenceScore": "high"},
        {"skillName": "Budgeting", "skillType": "transferable", "confidenceScore": -0.2,
         "category": "Finance", "evidenceText": "Managed the society budget"},
    ])

    assert skills[0] == {
        "skill_name": "Python", "category": None, "skill_type": "technical",
        "confidence_score": 1.0, "evidence_text": None
    }
    assert skills[1]["skill_type"] == "technical"
    assert skills[1]["confidence_score"] is None
    assert skills[2]["skill_type"] == "transferable"
    assert skills[2]["confidence_score"] == 0.0
    assert skills[2]["category"] == "Finance"


def test_long_names_truncated_to_column_width():
    skills = validate_extracted_skills([
        {"skillName": "K" * 300, "category": "C" * 400, "skillType": "technical"},
    ])

    assert skills[0]["skill_name"] == "K" * 255
    assert skills[0]["category"] == "C" * 255


def test_empty_skill_list_is_valid():
    assert validate_extracted_skills([]) == []


@pytest.mark.parametrize("reply", [
    {"skills": []},
    "Python, SQL",
    None,
    [{"skillName": "Python"}, "SQL"],
    [{"skillName": "Python"}, {"skillName": "   "}],
])
def test_malformed_skill_replies_rejected(reply):
    with pytest.raises(MalformedAIResponse):
        validate_extracted_skills(reply)


# ============================================================
# CAREER GUIDANCE
# ============================================================

@pytest.mark.parametrize("raw, expected", [(150, 100), (-5, 0), (72.6, 73), ("64", 64)])
def test_readiness_score_clamped(raw, expected):
    result = validate_career_guidance({"readinessScore": raw})
    assert result["readiness_score"] == expected


def test_guidance_lists_default_to_empty():
    result = validate_career_guidance({"readinessScore": 50, "strengths": "lots", "gaps": None})
    assert result["strengths"] == []
    assert result["gaps"] == []
    assert result["recommendations"] == []
    assert result["summary"] == ""


def test_gap_importance_defaults_to_medium():
    result = validate_career_guidance({
        "readinessScore": 40,
        "gaps": [
            {"skill": "Kubernetes", "importance": "critical"},
            {"skill": "SQL", "importance": "HIGH", "suggestion": "Take a databases course"},
            {"importance": "low"},
            "Docker",
        ]
    })
    assert result["gaps"] == [
        {"skill": "Kubernetes", "importance": "medium", "suggestion": ""},
        {"skill": "SQL", "importance": "high", "suggestion": "Take a databases course"},
    ]


@pytest.mark.parametrize("reply", [
    [],
    {"summary": "no score"},
    {"readinessScore": "very ready"},
    {"readinessScore": True},
])
def test_guidance_without_numeric_score_rejected(reply):
    with pytest.raises(MalformedAIResponse):
        validate_career_guidance(reply)


# ============================================================
# JOB MATCH
# ============================================================

def test_job_match_defaults():
    assert validate_job_match({}) == {
        "match_score": 0, "matched_skills": [], "missing_skills": [], "verdict": ""
    }
    assert validate_job_match(["not", "an", "object"])["match_score"] == 0


def test_job_match_coercion():
    result = validate_job_match({
        "matchScore": "87.4",
        "matchedSkills": ["Python", "", None, "SQL"],
        "missingSkills": "Kubernetes",
        "verdict": "  Good fit.  "
    })
    assert result == {
        "match_score": 87, "matched_skills": ["Python", "SQL"],
        "missing_skills": [], "verdict": "Good fit."
    }


@pytest.mark.parametrize("raw, expected", [(140, 100), (-3, 0), ("abc", 0)])
def test_match_score_clamped(raw, expected):
    assert validate_job_match({"matchScore": raw})["match_score"] == expected


# ============================================================
# JSON EXTRACTION
# ============================================================

def test_code_fences_stripped():
    assert extract_json("```json\n{\"a\": 1}\n```") == {"a": 1}
    assert extract_json("```\n[1, 2]\n```") == [1, 2]
    assert extract_json("  {\"b\": 2} ") == {"b": 2}


def test_unparseable_reply_raises_value_error():
    with pytest.raises(ValueError):
        extract_json("Sure! Here are the skills.")
