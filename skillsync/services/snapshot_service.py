"""
Skill Snapshot Aggregation

After every successful document analysis the user's whole skill set is
rolled up again (not incrementally) and appended to the skill_snapshots
collection. The timeline is what the growth charts read.
"""

import logging
from collections import Counter
from typing import Iterable, List

from skillsync.db.schema import SKILL_TYPES
from skillsync.services.mongo_service import SkillSnapshotService
from skillsync.services.postgres_service import ExtractedSkillService

logger = logging.getLogger(__name__)

TOP_CATEGORY_LIMIT = 5
DEFAULT_CATEGORY = "General"


def build_rollup(skills: Iterable[dict]) -> dict:
    """
    Count skills per type and pick the top categories.

    skills must be in creation order: Counter keeps insertion order and
    sorted() is stable, so equal counts stay in first-seen order.
    """
    counts_by_type = {skill_type: 0 for skill_type in SKILL_TYPES}
    categories = Counter()
    total = 0

    for skill in skills:
        total += 1
        skill_type = skill.get("type") or "technical"
        counts_by_type[skill_type] = counts_by_type.get(skill_type, 0) + 1
        categories[skill.get("category") or DEFAULT_CATEGORY] += 1

    ranked = sorted(categories.items(), key=lambda item: item[1], reverse=True)

    return {
        "counts_by_type": counts_by_type,
        "total_count": total,
        "top_categories": [name for name, _ in ranked[:TOP_CATEGORY_LIMIT]]
    }


class SnapshotAggregator:

    def __init__(self):
        self.skill_service = ExtractedSkillService()
        self.snapshot_service = SkillSnapshotService()

    def record(self, owner_id: int, document_id: int) -> dict:
        """Recompute the owner's rollup and append it as a new snapshot."""
        skills = self.skill_service.list_for_owner(owner_id, newest_first=False)
        rollup = build_rollup(skills)
        snapshot_id = self.snapshot_service.insert(owner_id, document_id, rollup)
        logger.info(
            "Recorded snapshot %s for user %s: %d skills",
            snapshot_id, owner_id, rollup["total_count"]
        )
        return rollup

    def timeline(self, owner_id: int) -> List[dict]:
        return self.snapshot_service.timeline(owner_id)


def get_snapshot_aggregator() -> SnapshotAggregator:
    return SnapshotAggregator()
