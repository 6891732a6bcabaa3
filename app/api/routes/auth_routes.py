"""
Authentication Routes

POST /auth/login - Admin login, returns JWT token
GET /auth/me - Get current admin info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.core.auth import authenticate_admin, create_access_token, get_current_admin
from app.schemas.schemas import LoginRequest, TokenResponse, AdminResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    admin = authenticate_admin(db, request.email, request.password)

    if not admin:
        logger.warning("Failed admin login for %s", request.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(data={"sub": str(admin["admin_id"]), "role": admin["role"]})
    logger.info("Admin %s logged in", admin["email"])

    return TokenResponse(access_token=token, admin_id=admin["admin_id"], role=admin["role"])


@router.get("/me", response_model=AdminResponse)
async def get_me(admin: dict = Depends(get_current_admin)):
    """Get current authenticated admin's info."""
    return AdminResponse(**admin)
