"""
Regional Ranking Service

Groups applicants by region and orders each group by score, then
tiebreaker. Applicants that have never been scored are scored on the way;
the tiebreaker is always recomputed because it depends on today's date for
open-ended jobs.

Process (RankingService.get_rankings):
1. Fetch applicants (optionally one region) from the repository
2. Fetch all their subjects and experiences (one query each)
3. rank_by_region()
4. Persist scores that were computed in step 3
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from app.models.applicant import Applicant, Subject, Experience, ScoreResult
from app.services.scoring_service import compute_score, calculate_tiebreaker
from app.services.application_repository import ApplicationRepository

logger = logging.getLogger(__name__)


def group_by_region(applicants: List[Applicant]) -> Dict[str, List[Applicant]]:
    """Partition applicants by region, keeping first-appearance order of regions."""
    groups: Dict[str, List[Applicant]] = {}
    for applicant in applicants:
        groups.setdefault(applicant.region, []).append(applicant)
    return groups


def _sort_key(applicant: Applicant):
    return (applicant.ai_score or 0, applicant.tiebreaker or 0)


def rank_by_region(
    applicants: List[Applicant],
    subjects_by_applicant: Dict[int, List[Subject]],
    experiences_by_applicant: Dict[int, List[Experience]],
    today: Optional[date] = None
) -> Dict[str, List[Applicant]]:
    """
    Rank applicants within their regions.

    Mutates each applicant: `ai_score` is set if it was None, `tiebreaker`
    is always set.

    Args:
        applicants: Applicants in input order (newest first from the repository)
        subjects_by_applicant: application_id -> subjects
        experiences_by_applicant: application_id -> experiences
        today: Reference date for open-ended experience (defaults to today)

    Returns:
        region -> applicants sorted by score desc, then tiebreaker desc.
        Full ties keep their input order.
    """
    today = today or date.today()
    groups = group_by_region(applicants)

    for region, members in groups.items():
        for applicant in members:
            subjects = subjects_by_applicant.get(applicant.application_id, [])
            experiences = experiences_by_applicant.get(applicant.application_id, [])

            if applicant.ai_score is None:
                result = compute_score(applicant, subjects, experiences, today)
                applicant.ai_score = result.score
                applicant.tiebreaker = result.tiebreaker
            else:
                applicant.tiebreaker = calculate_tiebreaker(subjects, experiences, today)

        groups[region] = sorted(members, key=_sort_key, reverse=True)

    return groups


class RankingService:
    """
    Ranks stored applications and keeps their stored scores current.

    The repository is passed in; this class holds no other state.
    """

    def __init__(self, repository: ApplicationRepository):
        self.repository = repository

    def get_rankings(
        self,
        region: Optional[str] = None,
        today: Optional[date] = None
    ) -> Dict[str, List[Applicant]]:
        """
        Rank all applications (or one region's) and persist new scores.

        Returns:
            region -> ranked applicants
        """
        applicants = self.repository.fetch_applicants(region)
        unscored = {a.application_id for a in applicants if a.ai_score is None}

        ids = [a.application_id for a in applicants]
        subjects_by_applicant = self.repository.fetch_subjects_by_application(ids)
        experiences_by_applicant = self.repository.fetch_experiences_by_application(ids)

        ranked = rank_by_region(applicants, subjects_by_applicant, experiences_by_applicant, today)

        for applicant in applicants:
            if applicant.application_id in unscored:
                self.repository.persist_score(applicant.application_id, applicant.ai_score)

        if unscored:
            logger.info("Scored %d previously unscored applications", len(unscored))

        return ranked

    def rescore(self, application_id: int, today: Optional[date] = None) -> Optional[ScoreResult]:
        """
        Recompute one application's score from its stored data and persist it.

        Returns:
            ScoreResult, or None if the application doesn't exist
        """
        applicant = self.repository.get_applicant(application_id)
        if applicant is None:
            return None

        result = compute_score(
            applicant,
            self.repository.fetch_subjects(application_id),
            self.repository.fetch_experiences(application_id),
            today
        )
        self.repository.persist_score(application_id, result.score)

        logger.info(
            "Rescored application %s: %s -> %s",
            application_id, applicant.ai_score, result.score
        )
        return result


def get_ranking_service(repository: ApplicationRepository) -> RankingService:
    """Get ranking service instance."""
    return RankingService(repository)
