"""
Relational schema.

The same DDL runs on PostgreSQL and SQLite; only the auto-increment
primary key differs between the two.
"""

from sqlalchemy import text

from skillsync.db.postgres import engine, is_sqlite

PK = "INTEGER PRIMARY KEY AUTOINCREMENT" if is_sqlite else "SERIAL PRIMARY KEY"

DOCUMENT_STATUSES = ("PROCESSING", "COMPLETED", "FAILED")
SKILL_TYPES = ("technical", "soft", "transferable")
COURSE_STATUSES = ("planned", "enrolled", "completed")

SCHEMA_STATEMENTS = [
    f"""
    CREATE TABLE IF NOT EXISTS users (
        user_id {PK},
        email VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(255) NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS documents (
        document_id {PK},
        user_id INTEGER NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
        filename VARCHAR(255) NOT NULL,
        storage_key VARCHAR(512) NOT NULL,
        storage_url VARCHAR(1024) NOT NULL,
        status VARCHAR(20) NOT NULL DEFAULT 'PROCESSING'
            CHECK (status IN ('PROCESSING', 'COMPLETED', 'FAILED')),
        uploaded_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS extracted_skills (
        skill_id {PK},
        user_id INTEGER NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
        document_id INTEGER NOT NULL REFERENCES documents(document_id) ON DELETE CASCADE,
        skill_name VARCHAR(255) NOT NULL,
        category VARCHAR(255),
        skill_type VARCHAR(20) NOT NULL DEFAULT 'technical'
            CHECK (skill_type IN ('technical', 'soft', 'transferable')),
        confidence_score REAL,
        evidence_text TEXT,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS user_goals (
        goal_id {PK},
        user_id INTEGER NOT NULL UNIQUE REFERENCES users(user_id) ON DELETE CASCADE,
        career_goal TEXT,
        education_level VARCHAR(100),
        current_study TEXT,
        study_year VARCHAR(50),
        top_priority TEXT,
        courses TEXT,
        want_to_study TEXT,
        study_duration VARCHAR(100),
        skill_goal TEXT,
        is_public BOOLEAN NOT NULL DEFAULT FALSE,
        onboarding_completed BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS courses (
        course_id {PK},
        user_id INTEGER NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
        name VARCHAR(255) NOT NULL,
        provider VARCHAR(255),
        url VARCHAR(1024),
        status VARCHAR(20) NOT NULL DEFAULT 'planned'
            CHECK (status IN ('planned', 'enrolled', 'completed')),
        skill_tags TEXT NOT NULL DEFAULT '[]',
        notes TEXT,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_documents_user ON documents(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_skills_user ON extracted_skills(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_skills_document ON extracted_skills(document_id)",
    "CREATE INDEX IF NOT EXISTS idx_courses_user ON courses(user_id)",
]

# Child tables first, so deleting in this order respects foreign keys
TABLES = ("extracted_skills", "courses", "user_goals", "documents", "users")


def init_schema():
    """Create tables and indexes if they don't exist. Safe to run repeatedly."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
