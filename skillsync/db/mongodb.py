"""
MongoDB Connection Utility

MongoDB stores:
- Skill snapshots (append-only growth timeline)
- Career guidance (AI-generated readiness assessment, one per user)
- OTP codes (short-lived sign-in codes, expired by a TTL index)

WHY MongoDB for these?
- Schema-flexible: AI outputs vary in structure
- Document-oriented: each snapshot/assessment is self-contained
- TTL indexes expire OTP codes without a cleanup job
"""
import logging

from pymongo import MongoClient, ASCENDING
from pymongo.database import Database
from pymongo.collection import Collection
from skillsync.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the skillsync_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "skill_snapshots": "skill_snapshots",
    "career_guidance": "career_guidance",
    "otp_codes": "otp_codes"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Timeline reads are always per owner, oldest first
    db[COLLECTIONS["skill_snapshots"]].create_index([
        ("owner_id", ASCENDING),
        ("recorded_at", ASCENDING)
    ])

    # One guidance record per user; upserts rely on this
    db[COLLECTIONS["career_guidance"]].create_index("owner_id", unique=True)

    # One pending code per recipient, removed by Mongo once expired
    db[COLLECTIONS["otp_codes"]].create_index("email", unique=True)
    db[COLLECTIONS["otp_codes"]].create_index("expires_at", expireAfterSeconds=0)

    logger.info("MongoDB indexes created")
