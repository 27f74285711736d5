"""
SkillSync
Student skill tracking backend with AI-assisted skill extraction.

Architecture:
- PostgreSQL: Structured data (users, documents, skills, goals, courses)
- MongoDB: AI outputs (career guidance, skill snapshots) and OTP codes
- DeepSeek AI: Skill extraction, readiness scoring, job matching
"""

__version__ = "1.0.0"
