"""
Display helpers for the admin views.

- score_band: colour band for a score (high >= 70, medium >= 50, low)
- format_experience_duration: "2 years, 3 months" style text
- split_certifications: comma-joined certification text -> list
"""

from typing import List, Optional

HIGH_SCORE = 70
MEDIUM_SCORE = 50


def score_band(score: Optional[int]) -> Optional[str]:
    """Return "high", "medium", "low", or None for an unscored application."""
    if score is None:
        return None
    if score >= HIGH_SCORE:
        return "high"
    if score >= MEDIUM_SCORE:
        return "medium"
    return "low"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_experience_duration(total_months: int) -> str:
    """
    Human-readable total experience.

    Examples:
        0  -> "None"
        5  -> "5 months"
        12 -> "1 year"
        27 -> "2 years, 3 months"
    """
    if total_months <= 0:
        return "None"

    years, months = divmod(total_months, 12)

    if years and months:
        return f"{_plural(years, 'year')}, {_plural(months, 'month')}"
    if years:
        return _plural(years, "year")
    return _plural(months, "month")


def split_certifications(certification: Optional[str]) -> List[str]:
    """Split the stored comma-joined certification text, dropping blanks."""
    if not certification:
        return []
    return [part.strip() for part in certification.split(",") if part.strip()]
