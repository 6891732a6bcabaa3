"""
Applicant Scoring Service

PURPOSE:
Give every applicant a 0-100 suitability score for the IT support role,
plus a tiebreaker used when two applicants in a region have the same score.

HOW IT WORKS:
1. Core subjects: Mathematics and English with a passing grade (1-3)
2. IT subject: best grade among Information Technology / EDPM subjects
3. Certifications: flat bonus if any recognised IT certification is listed
4. Experience: points per IT-related keyword found in job duties (capped)
5. Sum, floor, cap at 100

TIEBREAKER:
    passing subjects * 100 + total months of work experience

Everything here is a pure function of its inputs. Keyword checks are
case-insensitive substring matches against the fixed tuples below.
"""

import logging
import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from app.models.applicant import (
    Applicant, Subject, Experience, ScoreResult, ScoreBreakdown
)

logger = logging.getLogger(__name__)


# ============================================================
# KEYWORD SETS & POINTS
# ============================================================

QUALIFYING_GRADES = frozenset({"1", "2", "3"})

IT_SUBJECT_KEYWORDS = ("information technology", "edpm", "electronic document")
IT_SUBJECT_EXACT_NAMES = frozenset({"it"})

CERTIFICATION_KEYWORDS = (
    "comptia",
    "a+",
    "network+",
    "security+",
    "azure",
    "aws",
    "cloud",
    "microsoft",
    "cisco",
    "ccna",
    "itil",
    "dynamics",
)

EXPERIENCE_KEYWORDS = (
    "it",
    "support",
    "computer",
    "technical",
    "helpdesk",
    "troubleshoot",
    "software",
    "hardware",
    "network",
    "install",
    "maintain",
    "equipment",
    "printer",
    "device",
    "workstation",
    "training",
    "user support",
)

BOTH_CORE_SUBJECTS_POINTS = 30
ONE_CORE_SUBJECT_POINTS = 15
IT_GRADE_POINTS = {1: 30, 2: 20, 3: 15}
CERTIFICATION_POINTS = 20
EXPERIENCE_POINTS_PER_KEYWORD = 3
EXPERIENCE_POINTS_CAP = 25
MAX_SCORE = 100

GRADE_WEIGHT = 100  # tiebreaker weight of one passing subject


# ============================================================
# KEYWORD MATCHING
# ============================================================

def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def has_qualifying_grade(subject: Subject) -> bool:
    """True if the subject was passed with grade 1, 2 or 3."""
    return _normalize(subject.grade) in QUALIFYING_GRADES


def is_mathematics_subject(subject_name: str) -> bool:
    return "math" in _normalize(subject_name)


def is_english_subject(subject_name: str) -> bool:
    return "english" in _normalize(subject_name)


def is_it_subject(subject_name: str) -> bool:
    """
    Information Technology / EDPM check.

    "IT" only counts as an exact name; a substring check would match
    words like "Literature".
    """
    name = _normalize(subject_name)
    if name in IT_SUBJECT_EXACT_NAMES:
        return True
    return any(keyword in name for keyword in IT_SUBJECT_KEYWORDS)


def matching_certification_keyword(certification: Optional[str]) -> Optional[str]:
    """Return the first recognised certification keyword, or None."""
    text = _normalize(certification)
    if not text:
        return None
    for keyword in CERTIFICATION_KEYWORDS:
        if keyword in text:
            return keyword
    return None


def matching_experience_keywords(duties: Optional[str]) -> List[str]:
    """All experience keywords contained in a duties description."""
    text = _normalize(duties)
    if not text:
        return []
    return [keyword for keyword in EXPERIENCE_KEYWORDS if keyword in text]


# ============================================================
# SCORE COMPONENTS
# ============================================================

def core_subject_points(subjects: Iterable[Subject]) -> int:
    """30 for Mathematics and English both passed, 15 for only one."""
    has_math = False
    has_english = False

    for subject in subjects:
        if not has_qualifying_grade(subject):
            continue
        if is_mathematics_subject(subject.subject_name):
            has_math = True
        if is_english_subject(subject.subject_name):
            has_english = True

    if has_math and has_english:
        return BOTH_CORE_SUBJECTS_POINTS
    if has_math or has_english:
        return ONE_CORE_SUBJECT_POINTS
    return 0


def it_subject_points(subjects: Iterable[Subject]) -> int:
    """Points for the best (lowest) grade among IT/EDPM subjects."""
    grades = []
    for subject in subjects:
        if not is_it_subject(subject.subject_name):
            continue
        grade = _normalize(subject.grade)
        if grade.isdigit():
            grades.append(int(grade))

    if not grades:
        return 0
    return IT_GRADE_POINTS.get(min(grades), 0)


def certification_points(certification: Optional[str]) -> int:
    """Flat bonus for any recognised certification. Does not stack."""
    if matching_certification_keyword(certification):
        return CERTIFICATION_POINTS
    return 0


def experience_points(experiences: Iterable[Experience]) -> int:
    """3 points per keyword hit, across all experiences, capped at 25."""
    hits = 0
    for experience in experiences:
        hits += len(matching_experience_keywords(experience.duties))
    return min(hits * EXPERIENCE_POINTS_PER_KEYWORD, EXPERIENCE_POINTS_CAP)


def score_breakdown(
    applicant: Applicant,
    subjects: List[Subject],
    experiences: List[Experience]
) -> ScoreBreakdown:
    """
    Score an applicant component by component.

    Args:
        applicant: Only `certification` is used
        subjects: The applicant's CXC subjects
        experiences: The applicant's work history

    Returns:
        ScoreBreakdown whose `total` is the final score
    """
    core = core_subject_points(subjects)
    it_subject = it_subject_points(subjects)
    certification = certification_points(applicant.certification)
    experience = experience_points(experiences)

    total = min(math.floor(core + it_subject + certification + experience), MAX_SCORE)

    return ScoreBreakdown(
        core_subjects=core,
        it_subject=it_subject,
        certification=certification,
        experience=experience,
        total=total
    )


def calculate_score(
    applicant: Applicant,
    subjects: List[Subject],
    experiences: List[Experience]
) -> int:
    """Integer score in [0, 100]."""
    return score_breakdown(applicant, subjects or [], experiences or []).total


# ============================================================
# TIEBREAKER
# ============================================================

DateLike = Union[date, datetime, str, None]


def _coerce_date(value: DateLike) -> Optional[date]:
    """Accept date, datetime or ISO string. Raises ValueError on garbage."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def months_between(start: date, end: date) -> int:
    """Calendar-month difference, ignoring days. Never negative."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(0, months)


def experience_months(experience: Experience, today: Optional[date] = None) -> int:
    """
    Months covered by one experience entry.

    An open-ended entry runs until `today`. Unparseable dates count as
    zero months rather than failing the whole ranking.
    """
    today = today or date.today()
    try:
        start = _coerce_date(experience.start_date)
        end = _coerce_date(experience.end_date) or today
    except (TypeError, ValueError):
        logger.warning(
            "Unparseable experience dates start=%r end=%r; counting 0 months",
            experience.start_date, experience.end_date
        )
        return 0

    if start is None:
        return 0
    return months_between(start, end)


def total_experience_months(
    experiences: Iterable[Experience],
    today: Optional[date] = None
) -> int:
    today = today or date.today()
    return sum(experience_months(exp, today) for exp in experiences)


def calculate_tiebreaker(
    subjects: List[Subject],
    experiences: List[Experience],
    today: Optional[date] = None
) -> int:
    """passing subjects * 100 + total months of experience."""
    passing = sum(1 for s in subjects or [] if has_qualifying_grade(s))
    return passing * GRADE_WEIGHT + total_experience_months(experiences or [], today)


# ============================================================
# PUBLIC ENTRY POINT
# ============================================================

def compute_score(
    applicant: Applicant,
    subjects: List[Subject],
    experiences: List[Experience],
    today: Optional[date] = None
) -> ScoreResult:
    """
    Score one applicant.

    Returns:
        ScoreResult(score, tiebreaker)
    """
    subjects = subjects or []
    experiences = experiences or []
    return ScoreResult(
        score=calculate_score(applicant, subjects, experiences),
        tiebreaker=calculate_tiebreaker(subjects, experiences, today)
    )
