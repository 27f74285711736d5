"""
PostgreSQL Service - CRUD operations for the relational tables.

Tables:
1. users            - accounts (email + bcrypt hash)
2. documents        - uploaded files and their analysis status
3. extracted_skills - skills pulled out of documents by AI
4. user_goals       - onboarding answers, one row per user
5. courses          - user-tracked learning

Rows come back as dicts keyed the way the API schemas expect them.
"""

import json
from typing import Optional, List, Iterable

from sqlalchemy import text

from skillsync.db.postgres import get_db_session, execute_raw_sql, fetch_one


# ============================================================
# USERS
# ============================================================

class UserService:

    def get_by_email(self, email: str) -> Optional[dict]:
        return fetch_one(
            "SELECT user_id, email, password_hash, is_active, created_at FROM users WHERE email = :email",
            {"email": email.lower()}
        )

    def get_by_id(self, user_id: int) -> Optional[dict]:
        return fetch_one(
            "SELECT user_id, email, is_active, created_at FROM users WHERE user_id = :id",
            {"id": user_id}
        )

    def create(self, email: str, password_hash: str) -> int:
        """Insert a user and return the new user_id."""
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO users (email, password_hash)
                    VALUES (:email, :password_hash)
                    RETURNING user_id
                """),
                {"email": email.lower(), "password_hash": password_hash}
            )
            return result.fetchone()[0]


# ============================================================
# DOCUMENTS
# ============================================================

DOCUMENT_COLUMNS = """
    document_id AS id, user_id AS owner_id, filename, storage_key, storage_url,
    status, uploaded_at
"""


class DocumentRecordService:
    """
    Document rows. Status moves PROCESSING → COMPLETED | FAILED once;
    the conditional UPDATE is what enforces "once".
    """

    def create(self, owner_id: int, filename: str, storage_key: str, storage_url: str) -> dict:
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO documents (user_id, filename, storage_key, storage_url, status)
                    VALUES (:user_id, :filename, :storage_key, :storage_url, 'PROCESSING')
                    RETURNING document_id
                """),
                {
                    "user_id": owner_id,
                    "filename": filename,
                    "storage_key": storage_key,
                    "storage_url": storage_url
                }
            )
            document_id = result.fetchone()[0]
        return self.get(document_id)

    def get(self, document_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {DOCUMENT_COLUMNS} FROM documents WHERE document_id = :id",
            {"id": document_id}
        )

    def get_owned(self, document_id: int, owner_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {DOCUMENT_COLUMNS} FROM documents WHERE document_id = :id AND user_id = :owner",
            {"id": document_id, "owner": owner_id}
        )

    def list_for_owner(self, owner_id: int) -> List[dict]:
        return execute_raw_sql(
            f"SELECT {DOCUMENT_COLUMNS} FROM documents WHERE user_id = :owner ORDER BY document_id DESC",
            {"owner": owner_id}
        )

    def mark_status(self, document_id: int, status: str, db=None) -> bool:
        """
        Move a PROCESSING document to a terminal status.
        Returns False if the document had already left PROCESSING.
        """
        statement = text("""
            UPDATE documents SET status = :status, updated_at = CURRENT_TIMESTAMP
            WHERE document_id = :id AND status = 'PROCESSING'
        """)
        params = {"status": status, "id": document_id}
        if db is not None:
            return db.execute(statement, params).rowcount == 1
        with get_db_session() as session:
            return session.execute(statement, params).rowcount == 1

    def status_counts(self, owner_id: int) -> dict:
        counts = {"PROCESSING": 0, "COMPLETED": 0, "FAILED": 0}
        rows = execute_raw_sql(
            "SELECT status, COUNT(*) AS n FROM documents WHERE user_id = :owner GROUP BY status",
            {"owner": owner_id}
        )
        for row in rows:
            counts[row["status"]] = row["n"]
        return counts


# ============================================================
# EXTRACTED SKILLS
# ============================================================

SKILL_COLUMNS = """
    skill_id AS id, user_id AS owner_id, document_id, skill_name AS name, category,
    skill_type AS type, confidence_score AS confidence, evidence_text AS evidence_quote,
    created_at
"""


class ExtractedSkillService:
    """Skills are inserted in bulk per analysis and never updated."""

    def insert_many(self, db, owner_id: int, document_id: int, skills: Iterable[dict]) -> int:
        """
        Insert validated skills inside the caller's transaction.
        Returns number of rows written.
        """
        count = 0
        for skill in skills:
            db.execute(
                text("""
                    INSERT INTO extracted_skills
                        (user_id, document_id, skill_name, category, skill_type, confidence_score, evidence_text)
                    VALUES (:user_id, :document_id, :skill_name, :category, :skill_type, :confidence, :evidence)
                """),
                {
                    "user_id": owner_id,
                    "document_id": document_id,
                    "skill_name": skill["skill_name"],
                    "category": skill.get("category"),
                    "skill_type": skill.get("skill_type", "technical"),
                    "confidence": skill.get("confidence_score"),
                    "evidence": skill.get("evidence_text")
                }
            )
            count += 1
        return count

    def list_for_owner(self, owner_id: int, skill_type: str = None, newest_first: bool = True) -> List[dict]:
        """All of a user's skills. Oldest-first order is creation order."""
        order = "DESC" if newest_first else "ASC"
        sql = f"SELECT {SKILL_COLUMNS} FROM extracted_skills WHERE user_id = :owner"
        params = {"owner": owner_id}
        if skill_type:
            sql += " AND skill_type = :skill_type"
            params["skill_type"] = skill_type
        sql += f" ORDER BY skill_id {order}"
        return execute_raw_sql(sql, params)

    def list_for_document(self, document_id: int) -> List[dict]:
        return execute_raw_sql(
            f"SELECT {SKILL_COLUMNS} FROM extracted_skills WHERE document_id = :doc ORDER BY skill_id",
            {"doc": document_id}
        )


# ============================================================
# USER GOALS
# ============================================================

GOAL_FIELDS = [
    "career_goal", "education_level", "current_study", "study_year", "top_priority",
    "courses", "want_to_study", "study_duration", "skill_goal"
]

GOAL_COLUMNS = "user_id AS owner_id, " + ", ".join(GOAL_FIELDS) + \
    ", is_public, onboarding_completed, created_at, updated_at"


class UserGoalService:

    def get(self, owner_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {GOAL_COLUMNS} FROM user_goals WHERE user_id = :owner",
            {"owner": owner_id}
        )

    def create(self, owner_id: int, values: dict) -> dict:
        params = {field: values.get(field) for field in GOAL_FIELDS}
        params["user_id"] = owner_id
        columns = ", ".join(GOAL_FIELDS)
        placeholders = ", ".join(f":{field}" for field in GOAL_FIELDS)
        with get_db_session() as db:
            db.execute(
                text(f"""
                    INSERT INTO user_goals (user_id, {columns}, onboarding_completed)
                    VALUES (:user_id, {placeholders}, TRUE)
                """),
                params
            )
        return self.get(owner_id)

    def update(self, owner_id: int, values: dict) -> bool:
        """Update only the provided goal fields. Returns False if no row exists."""
        updates = []
        params = {"owner": owner_id}
        for field in GOAL_FIELDS:
            if field in values:
                updates.append(f"{field} = :{field}")
                params[field] = values[field]

        with get_db_session() as db:
            result = db.execute(
                text(f"UPDATE user_goals SET {', '.join(updates + ['updated_at = CURRENT_TIMESTAMP'])} WHERE user_id = :owner"),
                params
            )
            return result.rowcount == 1

    def set_public(self, owner_id: int, is_public: bool) -> bool:
        with get_db_session() as db:
            result = db.execute(
                text("""
                    UPDATE user_goals SET is_public = :is_public, updated_at = CURRENT_TIMESTAMP
                    WHERE user_id = :owner
                """),
                {"is_public": is_public, "owner": owner_id}
            )
            return result.rowcount == 1


# ============================================================
# COURSES
# ============================================================

COURSE_FIELDS = ["name", "provider", "url", "status", "skill_tags", "notes"]

COURSE_COLUMNS = """
    course_id AS id, user_id AS owner_id, name, provider, url, status, skill_tags,
    notes, created_at
"""


def _course_row(row: Optional[dict]) -> Optional[dict]:
    """skill_tags is stored as a JSON string."""
    if row is None:
        return None
    row["skill_tags"] = json.loads(row["skill_tags"] or "[]")
    return row


class CourseService:

    def list_for_owner(self, owner_id: int) -> List[dict]:
        rows = execute_raw_sql(
            f"SELECT {COURSE_COLUMNS} FROM courses WHERE user_id = :owner ORDER BY course_id DESC",
            {"owner": owner_id}
        )
        return [_course_row(row) for row in rows]

    def get_owned(self, course_id: int, owner_id: int) -> Optional[dict]:
        return _course_row(fetch_one(
            f"SELECT {COURSE_COLUMNS} FROM courses WHERE course_id = :id AND user_id = :owner",
            {"id": course_id, "owner": owner_id}
        ))

    def create(self, owner_id: int, values: dict) -> dict:
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO courses (user_id, name, provider, url, status, skill_tags, notes)
                    VALUES (:user_id, :name, :provider, :url, :status, :skill_tags, :notes)
                    RETURNING course_id
                """),
                {
                    "user_id": owner_id,
                    "name": values["name"],
                    "provider": values.get("provider"),
                    "url": values.get("url"),
                    "status": values.get("status", "planned"),
                    "skill_tags": json.dumps(values.get("skill_tags") or []),
                    "notes": values.get("notes")
                }
            )
            course_id = result.fetchone()[0]
        return self.get_owned(course_id, owner_id)

    def update(self, course_id: int, owner_id: int, values: dict) -> Optional[dict]:
        """Partial update. Returns None when the course isn't the owner's."""
        updates = []
        params = {"id": course_id, "owner": owner_id}
        for field in COURSE_FIELDS:
            if field in values:
                value = values[field]
                if field == "skill_tags":
                    value = json.dumps(value or [])
                updates.append(f"{field} = :{field}")
                params[field] = value

        updates.append("updated_at = CURRENT_TIMESTAMP")
        with get_db_session() as db:
            result = db.execute(
                text(f"UPDATE courses SET {', '.join(updates)} WHERE course_id = :id AND user_id = :owner"),
                params
            )
            if result.rowcount == 0:
                return None
        return self.get_owned(course_id, owner_id)

    def delete(self, course_id: int, owner_id: int) -> bool:
        with get_db_session() as db:
            result = db.execute(
                text("DELETE FROM courses WHERE course_id = :id AND user_id = :owner"),
                {"id": course_id, "owner": owner_id}
            )
            return result.rowcount == 1

    def completed_names(self, owner_id: int) -> List[str]:
        rows = execute_raw_sql(
            "SELECT name FROM courses WHERE user_id = :owner AND status = 'completed' ORDER BY course_id",
            {"owner": owner_id}
        )
        return [row["name"] for row in rows]
