"""
Models module - domain objects used by services and routes.

- Applicant, Subject, Experience: rows of an application
- ScoreResult, ScoreBreakdown: scoring output
- Region, Grade: enumerations accepted by the form
"""

from app.models.applicant import (
    Applicant, Subject, Experience, ScoreResult, ScoreBreakdown,
    Region, Grade, REGIONS, GRADES, COMMON_SUBJECTS
)

__all__ = [
    "Applicant",
    "Subject",
    "Experience",
    "ScoreResult",
    "ScoreBreakdown",
    "Region",
    "Grade",
    "REGIONS",
    "GRADES",
    "COMMON_SUBJECTS",
]
