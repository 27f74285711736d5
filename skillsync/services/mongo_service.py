"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. skill_snapshots  - append-only skill rollups, one per analyzed document
2. career_guidance  - latest AI readiness assessment, one per user
3. otp_codes        - pending sign-in codes, one per email, TTL-expired

WHY MongoDB for these?
- AI assessments have nested, flexible schemas (gaps, strengths, ...)
- Snapshots are written once and read as a timeline, never joined
- TTL indexes clean up expired OTP codes on their own
"""

from datetime import datetime, timezone
from typing import Optional, List
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from skillsync.db.mongodb import get_collection, COLLECTIONS


def utcnow() -> datetime:
    """Naive UTC timestamp; pymongo hands datetimes back naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict with an "id" key."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# SKILL SNAPSHOTS COLLECTION
# Append-only growth timeline
# ============================================================

class SkillSnapshotService:
    """
    Snapshots are inserted and read, never updated or deleted.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["skill_snapshots"])

    def insert(self, owner_id: int, document_id: int, rollup: dict) -> str:
        """
        Append one snapshot.

        rollup: {"counts_by_type": {...}, "total_count": n, "top_categories": [...]}
        """
        doc = {
            "owner_id": owner_id,
            "document_id": document_id,
            "counts_by_type": rollup["counts_by_type"],
            "total_count": rollup["total_count"],
            "top_categories": rollup["top_categories"],
            "recorded_at": utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def timeline(self, owner_id: int) -> List[dict]:
        """All snapshots for a user, oldest first."""
        cursor = self.collection.find(
            {"owner_id": owner_id},
            sort=[("recorded_at", ASCENDING), ("_id", ASCENDING)]
        )
        return serialize_docs(cursor)

    def latest(self, owner_id: int) -> Optional[dict]:
        doc = self.collection.find_one(
            {"owner_id": owner_id},
            sort=[("recorded_at", DESCENDING), ("_id", DESCENDING)]
        )
        return serialize_doc(doc)


# ============================================================
# CAREER GUIDANCE COLLECTION
# One current assessment per user, replaced on regeneration
# ============================================================

class CareerGuidanceRecordService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["career_guidance"])

    def upsert(self, owner_id: int, career_goal: str, assessment: dict) -> dict:
        """
        Replace the user's guidance with a fresh assessment.
        The unique index on owner_id keeps this to one document per user.
        """
        doc = {
            "owner_id": owner_id,
            "career_goal": career_goal,
            "readiness_score": assessment["readiness_score"],
            "summary": assessment["summary"],
            "strengths": assessment["strengths"],
            "gaps": assessment["gaps"],
            "recommendations": assessment["recommendations"],
            "created_at": utcnow()
        }
        self.collection.replace_one({"owner_id": owner_id}, doc, upsert=True)
        return self.get(owner_id)

    def get(self, owner_id: int) -> Optional[dict]:
        doc = self.collection.find_one({"owner_id": owner_id}, {"_id": 0})
        return doc


# ============================================================
# OTP CODES COLLECTION
# Persisted, expiring sign-in codes keyed by recipient
# ============================================================

class OtpCodeService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["otp_codes"])

    def store(self, email: str, code_hash: str, expires_at: datetime) -> None:
        """Store (or replace) the pending code for an email."""
        self.collection.update_one(
            {"email": email},
            {"$set": {"email": email, "code_hash": code_hash, "expires_at": expires_at}},
            upsert=True
        )

    def get(self, email: str) -> Optional[dict]:
        return self.collection.find_one({"email": email}, {"_id": 0})

    def delete(self, email: str) -> bool:
        result = self.collection.delete_one({"email": email})
        return result.deleted_count > 0
