"""
Insights & Dashboard

Read-only statistics over a user's skills, documents and snapshot
timeline. Nothing here calls the model or writes anything.
"""

from collections import Counter
from typing import List, Optional

import numpy as np

from skillsync.db.schema import SKILL_TYPES
from skillsync.services.mongo_service import CareerGuidanceRecordService, SkillSnapshotService
from skillsync.services.postgres_service import (
    DocumentRecordService, ExtractedSkillService
)

TOP_CATEGORY_LIMIT = 8

# Band edges for confidence scores; the last bin is closed on the right
CONFIDENCE_EDGES = [0.0, 0.5, 0.8, 1.0]
CONFIDENCE_BANDS = ["low", "medium", "high"]


def type_percentages(type_counts: dict, total: int) -> dict:
    if total == 0:
        return {skill_type: 0 for skill_type in type_counts}
    return {
        skill_type: int(round(count * 100 / total))
        for skill_type, count in type_counts.items()
    }


def confidence_stats(confidences: List[float]) -> tuple:
    """
    Mean confidence (2 decimals) and per-band counts.
    Skills without a confidence score are left out of both.
    """
    if not confidences:
        return None, {band: 0 for band in CONFIDENCE_BANDS}

    values = np.array(confidences, dtype=float)
    counts, _ = np.histogram(values, bins=CONFIDENCE_EDGES)
    bands = {band: int(n) for band, n in zip(CONFIDENCE_BANDS, counts)}
    return round(float(np.mean(values)), 2), bands


def growth_delta(trend: List[dict]) -> Optional[int]:
    """Last total minus first total, once there are at least two snapshots."""
    if len(trend) < 2:
        return None
    return trend[-1]["total"] - trend[0]["total"]


class InsightsService:

    def __init__(self):
        self.skills = ExtractedSkillService()
        self.documents = DocumentRecordService()
        self.snapshots = SkillSnapshotService()
        self.guidance = CareerGuidanceRecordService()

    def _readiness_score(self, owner_id: int) -> Optional[int]:
        guidance = self.guidance.get(owner_id)
        return guidance["readiness_score"] if guidance else None

    def insights(self, owner_id: int) -> dict:
        skills = self.skills.list_for_owner(owner_id, newest_first=False)
        total = len(skills)

        type_counts = {skill_type: 0 for skill_type in SKILL_TYPES}
        categories = Counter()
        for skill in skills:
            type_counts[skill["type"]] = type_counts.get(skill["type"], 0) + 1
            categories[skill.get("category") or "General"] += 1

        ranked = sorted(categories.items(), key=lambda item: item[1], reverse=True)

        average, bands = confidence_stats(
            [s["confidence"] for s in skills if s.get("confidence") is not None]
        )

        trend = [
            {"recorded_at": snap["recorded_at"], "total": snap["total_count"]}
            for snap in self.snapshots.timeline(owner_id)
        ]

        return {
            "total_skills": total,
            "type_counts": type_counts,
            "type_percentages": type_percentages(type_counts, total),
            "top_categories": [
                {"category": name, "count": count}
                for name, count in ranked[:TOP_CATEGORY_LIMIT]
            ],
            "average_confidence": average,
            "confidence_bands": bands,
            "document_counts": self.documents.status_counts(owner_id),
            "trend": trend,
            "growth_delta": growth_delta(trend),
            "readiness_score": self._readiness_score(owner_id)
        }

    def dashboard(self, owner_id: int, goal: dict) -> dict:
        return {
            "career_goal": goal.get("career_goal"),
            "document_counts": self.documents.status_counts(owner_id),
            "total_skills": len(self.skills.list_for_owner(owner_id)),
            "readiness_score": self._readiness_score(owner_id),
            "latest_snapshot": self.snapshots.latest(owner_id)
        }


def get_insights_service() -> InsightsService:
    return InsightsService()
