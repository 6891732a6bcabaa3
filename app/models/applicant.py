"""
Domain models shared by the scoring core, the repository and the routes.

These mirror the database rows. `ai_score` stays None until the applicant
has been scored; `tiebreaker` is only filled in by the region ranker.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class Region(str, Enum):
    georgetown = "Georgetown"
    region_1 = "Region 1"
    region_2 = "Region 2"
    region_3 = "Region 3"
    region_4 = "Region 4"
    region_5 = "Region 5"
    region_6 = "Region 6"
    region_7 = "Region 7"
    region_8 = "Region 8"
    region_9 = "Region 9"
    region_10 = "Region 10"


class Grade(str, Enum):
    """CXC grades accepted on the form. 1 is best."""
    one = "1"
    two = "2"
    three = "3"


REGIONS = [r.value for r in Region]
GRADES = [g.value for g in Grade]

# Offered as suggestions on the application form; free text is still allowed
COMMON_SUBJECTS = [
    "Mathematics",
    "English A",
    "English B",
    "Information Technology",
    "Principles of Business",
    "Principles of Accounts",
    "Social Studies",
    "Integrated Science",
    "Biology",
    "Chemistry",
    "Physics",
    "Geography",
    "History",
    "Spanish",
    "French",
    "EDPM",
    "Office Administration",
]


class Subject(BaseModel):
    subject_name: str
    grade: str
    subject_id: Optional[int] = None
    application_id: Optional[int] = None


class Experience(BaseModel):
    # Stored values that are not ISO dates are kept as raw strings; the
    # scoring core counts them as zero months.
    company_name: str = ""
    start_date: Union[date, str] = Field(union_mode="left_to_right")
    end_date: Optional[Union[date, str]] = Field(None, union_mode="left_to_right")
    duties: str = ""
    experience_id: Optional[int] = None
    application_id: Optional[int] = None


class Applicant(BaseModel):
    application_id: int
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    dob: Optional[date] = None
    region: str
    certification: str = ""
    ai_score: Optional[int] = None
    created_at: Optional[datetime] = None
    tiebreaker: Optional[int] = None


class ScoreResult(BaseModel):
    score: int
    tiebreaker: int


class ScoreBreakdown(BaseModel):
    """Per-component contributions; `total` is the final capped score."""
    core_subjects: int
    it_subject: int
    certification: int
    experience: int
    total: int
