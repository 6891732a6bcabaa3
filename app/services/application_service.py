"""
Application Intake Service

Process (submit):
1. Reject duplicate email / phone
2. Store application, subjects and experiences
3. Score the stored application
4. Persist the score

The request schema (ApplicationCreate) has already checked field formats
and the mandatory Mathematics / English subjects by the time we get here.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.models.applicant import Applicant
from app.schemas.schemas import ApplicationCreate
from app.services.application_repository import ApplicationRepository
from app.services.scoring_service import compute_score

logger = logging.getLogger(__name__)


class DuplicateApplicationError(ValueError):
    """An application with this email or phone number already exists."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ApplicationService:
    """Stores and scores new applications."""

    def __init__(self, repository: ApplicationRepository):
        self.repository = repository

    def check_duplicates(self, data: ApplicationCreate) -> None:
        """Raise DuplicateApplicationError if the email or phone is taken."""
        if self.repository.email_exists(str(data.email)):
            raise DuplicateApplicationError(
                "email", "An application with this email already exists"
            )
        if self.repository.phone_exists(data.phone):
            raise DuplicateApplicationError(
                "phone", "An application with this phone number already exists"
            )

    def submit(self, data: ApplicationCreate) -> Applicant:
        """
        Store a validated application and score it.

        Returns:
            The stored Applicant with `ai_score` set

        Raises:
            DuplicateApplicationError: email or phone already used
        """
        self.check_duplicates(data)

        try:
            applicant = self.repository.create_application(data)
        except IntegrityError as e:
            # Lost a race with a concurrent submission using the same email/phone
            self.repository.db.rollback()
            raise DuplicateApplicationError(
                "email", "An application with this email or phone number already exists"
            ) from e

        result = compute_score(
            applicant,
            self.repository.fetch_subjects(applicant.application_id),
            self.repository.fetch_experiences(applicant.application_id)
        )
        self.repository.persist_score(applicant.application_id, result.score)
        applicant.ai_score = result.score

        logger.info(
            "Application %s submitted for %s, score %s",
            applicant.application_id, applicant.region, result.score
        )
        return applicant


def get_application_service(repository: ApplicationRepository) -> ApplicationService:
    """Get application service instance."""
    return ApplicationService(repository)
