"""
Admin Routes (JWT required)

GET /admin/applications - List applications, newest first (optional region filter)
GET /admin/applications/rankings - Applications ranked within each region
GET /admin/applications/regions/summary - Application counts per region
GET /admin/applications/{id} - Full application with score breakdown
POST /admin/applications/{id}/rescore - Recompute and store an application's score
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from app.api.dependencies import get_repository, get_rankings_service
from app.core.auth import get_current_admin
from app.models.applicant import Applicant, Region
from app.services.application_repository import ApplicationRepository
from app.services.ranking_service import RankingService
from app.services.scoring_service import (
    score_breakdown, calculate_tiebreaker, experience_months
)
from app.utils.formatting import score_band, format_experience_duration, split_certifications
from app.schemas.schemas import (
    ApplicationSummaryResponse, RankedApplicationResponse, RegionRankingResponse,
    RankingsResponse, RegionSummaryResponse, ApplicationDetailResponse,
    SubjectResponse, ExperienceResponse, ScoreBreakdownResponse, ScoreResultResponse
)

router = APIRouter(
    prefix="/admin/applications",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin)]
)


def _summary(applicant: Applicant) -> ApplicationSummaryResponse:
    return ApplicationSummaryResponse(
        application_id=applicant.application_id, name=applicant.name, email=applicant.email,
        phone=applicant.phone, region=applicant.region, ai_score=applicant.ai_score,
        score_band=score_band(applicant.ai_score), created_at=applicant.created_at
    )


@router.get("", response_model=List[ApplicationSummaryResponse])
async def list_applications(
    region: Optional[Region] = Query(None, description="Filter by region"),
    repo: ApplicationRepository = Depends(get_repository)
):
    """All applications, newest first."""
    return [_summary(a) for a in repo.fetch_applicants(region)]


@router.get("/rankings", response_model=RankingsResponse)
async def get_rankings(
    region: Optional[Region] = Query(None, description="Only rank this region"),
    service: RankingService = Depends(get_rankings_service)
):
    """
    Rank applications within each region.

    Order: score (highest first), then tiebreaker
    (passing subjects * 100 + months of experience).
    Unscored applications are scored and stored along the way.
    """
    ranked = service.get_rankings(region.value if region else None)

    regions = []
    total = 0
    for region_name, applicants in ranked.items():
        entries = [
            RankedApplicationResponse(
                **_summary(a).model_dump(),
                rank=position,
                tiebreaker=a.tiebreaker or 0
            )
            for position, a in enumerate(applicants, start=1)
        ]
        regions.append(RegionRankingResponse(region=region_name, total=len(entries), applications=entries))
        total += len(entries)

    return RankingsResponse(regions=regions, total_applications=total)


@router.get("/regions/summary", response_model=RegionSummaryResponse)
async def region_summary(repo: ApplicationRepository = Depends(get_repository)):
    """Number of applications per region."""
    counts = repo.count_by_region()
    return RegionSummaryResponse(counts=counts, total=sum(counts.values()))


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
async def get_application(application_id: int, repo: ApplicationRepository = Depends(get_repository)):
    """
    Application details, subjects, experience and how the score breaks down.

    The breakdown is recomputed from the current data. `score_is_current` is
    False when it no longer matches the stored ai_score (rescore to refresh).
    """
    applicant = repo.get_applicant(application_id)
    if not applicant:
        raise HTTPException(status_code=404, detail="Application not found")

    subjects = repo.fetch_subjects(application_id)
    experiences = repo.fetch_experiences(application_id)
    today = date.today()

    months = [experience_months(e, today) for e in experiences]
    total_months = sum(months)
    breakdown = score_breakdown(applicant, subjects, experiences)

    return ApplicationDetailResponse(
        application_id=applicant.application_id, name=applicant.name, address=applicant.address,
        phone=applicant.phone, email=applicant.email, dob=applicant.dob, region=applicant.region,
        certifications=split_certifications(applicant.certification),
        ai_score=applicant.ai_score, score_band=score_band(applicant.ai_score),
        created_at=applicant.created_at,
        subjects=[SubjectResponse(subject_name=s.subject_name, grade=s.grade) for s in subjects],
        experiences=[
            ExperienceResponse(
                company_name=e.company_name, start_date=e.start_date, end_date=e.end_date,
                duties=e.duties, months=m
            ) for e, m in zip(experiences, months)
        ],
        total_experience_months=total_months,
        total_experience=format_experience_duration(total_months),
        tiebreaker=calculate_tiebreaker(subjects, experiences, today),
        score_breakdown=ScoreBreakdownResponse(**breakdown.model_dump()),
        score_is_current=breakdown.total == applicant.ai_score
    )


@router.post("/{application_id}/rescore", response_model=ScoreResultResponse)
async def rescore_application(
    application_id: int,
    service: RankingService = Depends(get_rankings_service)
):
    """Recompute the score from the stored subjects, certifications and experience."""
    result = service.rescore(application_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Application not found")

    return ScoreResultResponse(
        application_id=application_id, score=result.score,
        tiebreaker=result.tiebreaker, score_band=score_band(result.score)
    )
