"""
Application Routes (public)

GET /applications/form-options - Regions, grades and suggested subjects for the form
POST /applications - Submit an application (validated, stored and scored)
"""

from fastapi import APIRouter, HTTPException, Depends

from app.api.dependencies import get_intake_service
from app.models.applicant import REGIONS, GRADES, COMMON_SUBJECTS
from app.services.application_service import ApplicationService, DuplicateApplicationError
from app.schemas.schemas import (
    ApplicationCreate, ApplicationSubmitResponse, FormOptionsResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/form-options", response_model=FormOptionsResponse)
async def form_options():
    """Values the application form offers in its dropdowns."""
    return FormOptionsResponse(regions=REGIONS, grades=GRADES, common_subjects=COMMON_SUBJECTS)


@router.post("", response_model=ApplicationSubmitResponse, status_code=201)
async def submit_application(
    data: ApplicationCreate,
    service: ApplicationService = Depends(get_intake_service)
):
    """
    Submit a job application.

    Requirements:
    - At least 5 CXC subjects, including Mathematics and English, graded 1-3
    - Phone number in the form 592XXXXXXX
    - Email and phone not used by an earlier application

    The application is scored immediately; the score is only shown to admins.
    """
    try:
        applicant = service.submit(data)
    except DuplicateApplicationError as e:
        raise HTTPException(status_code=409, detail=e.message)

    return ApplicationSubmitResponse(
        message="Application submitted successfully",
        application_id=applicant.application_id
    )
