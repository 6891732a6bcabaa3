"""
Shared FastAPI dependencies.

Services get their collaborators from here instead of module globals:

    @router.get("/x")
    async def route(repo: ApplicationRepository = Depends(get_repository)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.services.application_repository import ApplicationRepository, get_application_repository
from app.services.application_service import ApplicationService, get_application_service
from app.services.ranking_service import RankingService, get_ranking_service


def get_repository(db: Session = Depends(get_db)) -> ApplicationRepository:
    return get_application_repository(db)


def get_intake_service(repo: ApplicationRepository = Depends(get_repository)) -> ApplicationService:
    return get_application_service(repo)


def get_rankings_service(repo: ApplicationRepository = Depends(get_repository)) -> RankingService:
    return get_ranking_service(repo)
