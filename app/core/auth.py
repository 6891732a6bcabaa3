"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependency for admin-only routes
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.database import get_db

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (auto_error=False so a missing header is a 401, not a 403)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def authenticate_admin(db: Session, email: str, password: str) -> Optional[dict]:
    """
    Check admin credentials.

    Returns:
        Admin dict if the email exists, is active and the password matches, else None
    """
    if not email or not password:
        return None

    row = db.execute(
        text("""
            SELECT admin_id, email, password_hash, name, role, is_active
            FROM admins WHERE email = :email
        """),
        {"email": email.lower()}
    ).fetchone()

    if not row or not row[5]:
        return None
    if not verify_password(password, row[2]):
        return None

    return {"admin_id": row[0], "email": row[1], "name": row[3], "role": row[4]}


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> dict:
    """
    FastAPI dependency - Get current authenticated admin.

    The admin row is re-checked on every request so removing or
    deactivating an admin revokes access immediately.

    Usage:
        @router.get("/admin/thing")
        async def route(admin: dict = Depends(get_current_admin)):
            return admin
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    admin_id = payload.get("sub")
    if not admin_id or not str(admin_id).isdigit():
        raise credentials_exception

    row = db.execute(
        text("SELECT admin_id, email, name, role, is_active FROM admins WHERE admin_id = :id"),
        {"id": int(admin_id)}
    ).fetchone()

    if not row:
        logger.warning("Token for unknown admin id %s rejected", admin_id)
        raise credentials_exception

    if not row[4]:  # is_active
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {"admin_id": row[0], "email": row[1], "name": row[2], "role": row[3]}
