#!/usr/bin/env python3
"""
Demo User Seed Script

Creates a demo account with data in every table and collection:
user_goals, documents, extracted_skills, skill_snapshots,
career_guidance and courses. Re-running wipes and recreates the account.

IMPORTANT: This script requires:
- PostgreSQL (or DATABASE_URL) reachable
- MongoDB running

No AI calls are made; skills and guidance are canned.

Run: python scripts/seed_demo_user.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import text

from skillsync.core.auth import hash_password
from skillsync.db.mongodb import get_collection, init_mongo_indexes, COLLECTIONS
from skillsync.db.postgres import get_db_session
from skillsync.db.schema import init_schema
from skillsync.services.mongo_service import CareerGuidanceRecordService
from skillsync.services.postgres_service import (
    CourseService, DocumentRecordService, ExtractedSkillService, UserGoalService, UserService
)
from skillsync.services.snapshot_service import SnapshotAggregator
from skillsync.services.storage_service import get_object_store


DEMO_EMAIL = "demo@skillsync.app"
DEMO_PASSWORD = "SkillSync@Demo2026"


# ============================================================
# SAMPLE DATA
# ============================================================

GOAL = {
    "education_level": "undergraduate",
    "current_study": "Computer Science",
    "study_year": "3rd Year",
    "career_goal": "Full-Stack Software Engineer",
    "top_priority": "Land a software engineering internship at a top tech company",
}


def skill(name, category, skill_type, confidence, evidence):
    return {
        "skill_name": name, "category": category, "skill_type": skill_type,
        "confidence_score": confidence, "evidence_text": evidence
    }


DOCUMENTS = [
    ("Alex_Rivera_Resume_2025.txt", [
        skill("React", "Frontend", "technical", 0.96, "Built 4 production React apps with hooks and context API"),
        skill("TypeScript", "Programming", "technical", 0.94, "All projects use strict TypeScript with typed API contracts"),
        skill("Node.js", "Backend", "technical", 0.92, "REST APIs and GraphQL services built with Node + Express"),
        skill("PostgreSQL", "Databases", "technical", 0.88, "Designed normalised schemas, wrote complex queries and migrations"),
        skill("Problem Solving", "Core Skills", "soft", 0.90, "Led debugging sessions reducing incident resolution time by 40%"),
        skill("Communication", "Soft Skills", "soft", 0.87, "Presented technical findings to non-technical stakeholders"),
        skill("Agile / Scrum", "Methodology", "transferable", 0.85, "Participated in 2-week sprints with daily stand-ups"),
    ]),
    ("CS_Transcript_2025.txt", [
        skill("Algorithms & Data Structures", "Computer Science", "technical", 0.93, "A+ in Data Structures, top 5% of cohort"),
        skill("Python", "Programming", "technical", 0.91, "Used Python for ML coursework and scripting projects"),
        skill("Machine Learning", "AI / ML", "technical", 0.82, "Coursework in supervised learning, CNNs, and NLP"),
        skill("Critical Thinking", "Core Skills", "soft", 0.89, "Dean's List for consistent academic performance"),
        skill("Research", "Academic", "transferable", 0.84, "Co-authored paper on distributed caching strategies"),
    ]),
    ("Internship_Project_Report.txt", [
        skill("Next.js", "Frontend", "technical", 0.94, "Built company dashboard with Next.js 14 App Router"),
        skill("Docker", "DevOps", "technical", 0.83, "Containerised the app for staging and production environments"),
        skill("REST API Design", "Backend", "technical", 0.88, "Designed and documented REST endpoints following OpenAPI spec"),
        skill("Team Leadership", "Soft Skills", "soft", 0.85, "Mentored 2 junior interns during the summer cohort"),
        skill("Project Management", "Methodology", "transferable", 0.82, "Coordinated feature delivery across 3 teams using Jira"),
    ]),
]

GUIDANCE = {
    "readiness_score": 74,
    "summary": (
        "Strong foundation in modern web development with hands-on React, TypeScript "
        "and Node.js experience. Key gaps are system design, cloud infrastructure and "
        "behavioural interview preparation."
    ),
    "strengths": [
        "Production-grade React & TypeScript proficiency",
        "End-to-end full-stack delivery across 3+ projects",
        "Strong academic grounding in algorithms and data structures",
    ],
    "gaps": [
        {"skill": "System Design", "importance": "high",
         "suggestion": "Read 'Designing Data-Intensive Applications' and practice design interviews"},
        {"skill": "Cloud Platforms (AWS/GCP)", "importance": "high",
         "suggestion": "Complete an associate-level cloud certification"},
        {"skill": "Redis / Caching", "importance": "medium",
         "suggestion": "Add Redis caching to an existing project"},
    ],
    "recommendations": [
        "Contribute to 1-2 open-source projects to build public GitHub activity",
        "Solve 3 LeetCode problems per week",
        "Prepare STAR-format answers for common behavioural questions",
    ],
}

COURSES = [
    {"name": "AWS Solutions Architect - Associate", "provider": "A Cloud Guru",
     "url": "https://acloudguru.com/course/aws-certified-solutions-architect-associate",
     "status": "enrolled", "skill_tags": ["AWS", "Cloud", "System Design"],
     "notes": "Targeting the exam in April."},
    {"name": "Full-Stack Open", "provider": "University of Helsinki",
     "url": "https://fullstackopen.com", "status": "completed",
     "skill_tags": ["React", "Node.js", "GraphQL", "TypeScript"], "notes": None},
    {"name": "Docker & Kubernetes: The Complete Guide", "provider": "Udemy",
     "url": "https://www.udemy.com/course/docker-and-kubernetes-the-complete-guide/",
     "status": "planned", "skill_tags": ["Docker", "Kubernetes", "DevOps"], "notes": "Queued after AWS cert."},
    {"name": "CS50's Introduction to AI with Python", "provider": "Harvard / edX",
     "url": "https://cs50.harvard.edu/ai/", "status": "completed",
     "skill_tags": ["Machine Learning", "Python", "AI"], "notes": None},
]


# ============================================================
# SEEDING
# ============================================================

def wipe_existing(users: UserService):
    existing = users.get_by_email(DEMO_EMAIL)
    if not existing:
        return
    user_id = existing["user_id"]
    # Every table cascades from users
    with get_db_session() as db:
        db.execute(text("DELETE FROM users WHERE user_id = :id"), {"id": user_id})
    for name in ("skill_snapshots", "career_guidance"):
        get_collection(COLLECTIONS[name]).delete_many({"owner_id": user_id})
    print(f"    Wiped existing demo user {user_id}")


def seed_documents(user_id: int):
    documents = DocumentRecordService()
    skills = ExtractedSkillService()
    snapshots = SnapshotAggregator()
    store = get_object_store()

    for filename, doc_skills in DOCUMENTS:
        body = "\n".join(f"- {s['evidence_text']}" for s in doc_skills).encode("utf-8")
        key = store.build_key(user_id, filename)
        url = store.put(key, body)
        document = documents.create(user_id, filename, key, url)

        with get_db_session() as db:
            count = skills.insert_many(db, user_id, document["id"], doc_skills)
            documents.mark_status(document["id"], "COMPLETED", db=db)

        rollup = snapshots.record(user_id, document["id"])
        print(f"    {filename} -> {count} skills (running total {rollup['total_count']})")


def main():
    print("=" * 50)
    print("SKILLSYNC - DEMO USER SEED")
    print("=" * 50)

    init_schema()
    init_mongo_indexes()

    users = UserService()
    wipe_existing(users)

    print("\n[1] Creating user...")
    user_id = users.create(DEMO_EMAIL, hash_password(DEMO_PASSWORD))
    print(f"    User ID: {user_id}")

    print("\n[2] Seeding goals...")
    UserGoalService().create(user_id, GOAL)
    UserGoalService().set_public(user_id, True)

    print("\n[3] Seeding documents, skills and snapshots...")
    seed_documents(user_id)

    print("\n[4] Seeding career guidance...")
    CareerGuidanceRecordService().upsert(user_id, GOAL["career_goal"], GUIDANCE)

    print("\n[5] Seeding courses...")
    courses = CourseService()
    for course in COURSES:
        courses.create(user_id, course)
    print(f"    {len(COURSES)} courses added")

    print("\n" + "=" * 50)
    print("Seed complete!")
    print(f"  Email    : {DEMO_EMAIL}")
    print(f"  Password : {DEMO_PASSWORD}")
    print(f"  Profile  : /api/p/{user_id}")
    print("=" * 50)


if __name__ == "__main__":
    main()
