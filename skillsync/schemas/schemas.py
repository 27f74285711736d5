"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON keys are camelCase on the wire; snake_case is accepted on input.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum

from skillsync.utils.password_validation import password_problems


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class DocumentStatus(str, Enum):
    processing = "PROCESSING"
    completed = "COMPLETED"
    failed = "FAILED"


class SkillType(str, Enum):
    technical = "technical"
    soft = "soft"
    transferable = "transferable"


class GapImportance(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class CourseStatus(str, Enum):
    planned = "planned"
    enrolled = "enrolled"
    completed = "completed"


class OtpAction(str, Enum):
    send = "send"
    verify = "verify"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(ApiModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        problems = password_problems(value)
        if problems:
            raise ValueError(problems[0])
        return value


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class OtpRequest(ApiModel):
    email: EmailStr
    action: OtpAction
    code: Optional[str] = None


class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int


class UserResponse(ApiModel):
    user_id: int
    email: str
    is_active: bool
    created_at: datetime


class RegisterResponse(ApiModel):
    message: str
    user_id: int
    password_strength: str


# ============================================================
# DOCUMENT & SKILL SCHEMAS
# ============================================================

class DocumentResponse(ApiModel):
    id: int
    owner_id: int
    filename: str
    storage_url: str
    status: DocumentStatus
    uploaded_at: datetime


class AnalyzeRequest(ApiModel):
    document_id: int


class AnalyzeResponse(ApiModel):
    status: DocumentStatus
    skills_count: int = 0
    error: Optional[str] = None


class SkillResponse(ApiModel):
    id: int
    owner_id: int
    document_id: int
    name: str
    category: Optional[str] = None
    type: SkillType
    confidence: Optional[float] = None
    evidence_quote: Optional[str] = None
    created_at: datetime


class DocumentDetailResponse(DocumentResponse):
    skills: List[SkillResponse] = []


class SkillSnapshotResponse(ApiModel):
    id: str
    owner_id: int
    document_id: int
    counts_by_type: Dict[str, int]
    total_count: int
    top_categories: List[str]
    recorded_at: datetime


# ============================================================
# CAREER GUIDANCE & JOB MATCH SCHEMAS
# ============================================================

class SkillGap(ApiModel):
    skill: str
    importance: GapImportance
    suggestion: str = ""


class CareerGuidanceResponse(ApiModel):
    owner_id: int
    career_goal: str
    readiness_score: int = Field(..., ge=0, le=100)
    summary: str = ""
    strengths: List[str] = []
    gaps: List[SkillGap] = []
    recommendations: List[str] = []
    created_at: datetime


class CompareRequest(ApiModel):
    job_description: str = ""


class JobMatchResponse(ApiModel):
    match_score: int = Field(..., ge=0, le=100)
    matched_skills: List[str] = []
    missing_skills: List[str] = []
    verdict: str = ""


# ============================================================
# GOAL SCHEMAS
# ============================================================

class UserGoalCreate(ApiModel):
    career_goal: Optional[str] = None
    education_level: Optional[str] = None
    current_study: Optional[str] = None
    study_year: Optional[str] = None
    top_priority: Optional[str] = None
    courses: Optional[str] = None
    want_to_study: Optional[str] = None
    study_duration: Optional[str] = None
    skill_goal: Optional[str] = None


class UserGoalUpdate(UserGoalCreate):
    pass


class UserGoalResponse(UserGoalCreate):
    owner_id: int
    is_public: bool = False
    onboarding_completed: bool = True
    created_at: datetime
    updated_at: datetime


class VisibilityRequest(ApiModel):
    is_public: StrictBool


class VisibilityResponse(ApiModel):
    is_public: bool


# ============================================================
# COURSE SCHEMAS
# ============================================================

class CourseCreate(ApiModel):
    name: str = ""
    provider: Optional[str] = None
    url: Optional[str] = None
    status: CourseStatus = CourseStatus.planned
    skill_tags: List[str] = []
    notes: Optional[str] = None


class CourseUpdate(ApiModel):
    name: Optional[str] = None
    provider: Optional[str] = None
    url: Optional[str] = None
    status: Optional[CourseStatus] = None
    skill_tags: Optional[List[str]] = None
    notes: Optional[str] = None


class CourseResponse(ApiModel):
    id: int
    owner_id: int
    name: str
    provider: Optional[str] = None
    url: Optional[str] = None
    status: CourseStatus
    skill_tags: List[str] = []
    notes: Optional[str] = None
    created_at: datetime


# ============================================================
# PROFILE, DASHBOARD & INSIGHTS SCHEMAS
# ============================================================

class PublicProfileResponse(ApiModel):
    user_id: int
    career_goal: Optional[str] = None
    skill_goal: Optional[str] = None
    current_study: Optional[str] = None
    education_level: Optional[str] = None
    skill_counts: Dict[str, int]
    skills_by_type: Dict[str, Dict[str, List[str]]]
    readiness_score: Optional[int] = None
    guidance_summary: Optional[str] = None
    strengths: List[str] = []
    completed_courses: List[str] = []


class DashboardResponse(ApiModel):
    career_goal: Optional[str] = None
    document_counts: Dict[str, int]
    total_skills: int
    readiness_score: Optional[int] = None
    latest_snapshot: Optional[SkillSnapshotResponse] = None


class CategoryCount(ApiModel):
    category: str
    count: int


class TrendPoint(ApiModel):
    recorded_at: datetime
    total: int


class InsightsResponse(ApiModel):
    total_skills: int
    type_counts: Dict[str, int]
    type_percentages: Dict[str, int]
    top_categories: List[CategoryCount]
    average_confidence: Optional[float] = None
    confidence_bands: Dict[str, int]
    document_counts: Dict[str, int]
    trend: List[TrendPoint]
    growth_delta: Optional[int] = None
    readiness_score: Optional[int] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(ApiModel):
    message: str
    success: bool = True
