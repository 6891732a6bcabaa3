"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

import re
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Dict, Union
from datetime import date, datetime

from app.models.applicant import Region, Grade


PHONE_PATTERN = re.compile(r"^592\d{7,}$")

MATHEMATICS_NAMES = {"mathematics"}
ENGLISH_NAMES = {"english", "english a", "english b"}

MIN_SUBJECTS = 5


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin_id: int
    role: str

class AdminResponse(BaseModel):
    admin_id: int
    email: str
    name: Optional[str] = None
    role: str


# ============================================================
# APPLICATION INTAKE SCHEMAS
# ============================================================

class SubjectIn(BaseModel):
    subject_name: str = Field(..., min_length=1, max_length=200)
    grade: Grade

    @field_validator("subject_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Subject name is required")
        return v


class ExperienceIn(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    duties: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class ApplicationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1)
    phone: str
    email: EmailStr
    dob: date
    region: Region
    certification: str = ""
    subjects: List[SubjectIn] = Field(..., min_length=MIN_SUBJECTS)
    experiences: List[ExperienceIn] = []

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("592"):
            raise ValueError("Phone number must start with country code 592")
        if not PHONE_PATTERN.match(v):
            raise ValueError("Phone number must be in format 592XXXXXXX with at least 7 digits after 592")
        return v

    @field_validator("certification", mode="before")
    @classmethod
    def default_certification(cls, v):
        return v or ""

    @model_validator(mode="after")
    def check_mandatory_subjects(self):
        names = {s.subject_name.lower() for s in self.subjects}
        missing = []
        if not names & MATHEMATICS_NAMES:
            missing.append("Mathematics")
        if not names & ENGLISH_NAMES:
            missing.append("English")
        if missing:
            raise ValueError(f"Mandatory subjects missing: {', '.join(missing)}")
        return self


class ApplicationSubmitResponse(BaseModel):
    success: bool = True
    message: str
    application_id: int


class FormOptionsResponse(BaseModel):
    regions: List[str]
    grades: List[str]
    common_subjects: List[str]


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class ApplicationSummaryResponse(BaseModel):
    application_id: int
    name: str
    email: str
    phone: str
    region: str
    ai_score: Optional[int] = None
    score_band: Optional[str] = None
    created_at: Optional[datetime] = None

class RankedApplicationResponse(ApplicationSummaryResponse):
    rank: int
    tiebreaker: int

class RegionRankingResponse(BaseModel):
    region: str
    total: int
    applications: List[RankedApplicationResponse]

class RankingsResponse(BaseModel):
    regions: List[RegionRankingResponse]
    total_applications: int

class RegionSummaryResponse(BaseModel):
    counts: Dict[str, int]
    total: int

class SubjectResponse(BaseModel):
    subject_name: str
    grade: str

class ExperienceResponse(BaseModel):
    company_name: str
    start_date: Union[date, str] = Field(union_mode="left_to_right")
    end_date: Optional[Union[date, str]] = Field(None, union_mode="left_to_right")
    duties: str
    months: int

class ScoreBreakdownResponse(BaseModel):
    core_subjects: int
    it_subject: int
    certification: int
    experience: int
    total: int

class ApplicationDetailResponse(BaseModel):
    application_id: int
    name: str
    address: str
    phone: str
    email: str
    dob: Optional[date] = None
    region: str
    certifications: List[str] = []
    ai_score: Optional[int] = None
    score_band: Optional[str] = None
    created_at: Optional[datetime] = None
    subjects: List[SubjectResponse]
    experiences: List[ExperienceResponse]
    total_experience_months: int
    total_experience: str
    tiebreaker: int
    # Recomputed from the stored data on every request. When it differs from
    # ai_score the stored score is stale and can be refreshed with a rescore.
    score_breakdown: ScoreBreakdownResponse
    score_is_current: bool

class ScoreResultResponse(BaseModel):
    application_id: int
    score: int
    tiebreaker: int
    score_band: str
