"""
Database Schema

Tables:
1. applications            - One row per submitted application (ai_score filled in after scoring)
2. application_subjects    - CXC subjects and grades per application
3. application_experiences - Work history per application
4. admins                  - Accounts allowed into the admin area

Tables are declared with SQLAlchemy Core so the same definitions create the
schema on PostgreSQL (production) and SQLite (tests, local runs). Queries
elsewhere are plain SQL through sqlalchemy.text().
"""

import logging

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Date, DateTime, Boolean,
    ForeignKey, func, text
)
from sqlalchemy.engine import Engine

from app.core.config import DEFAULT_ADMIN_PASSWORD, get_settings
from app.core.auth import hash_password

logger = logging.getLogger(__name__)

metadata = MetaData()


applications = Table(
    "applications", metadata,
    Column("application_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("address", Text, nullable=False),
    Column("phone", String(20), nullable=False, unique=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("dob", Date, nullable=False),
    Column("region", String(20), nullable=False, index=True),
    Column("certification", Text, nullable=False, server_default=""),
    Column("ai_score", Integer, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

application_subjects = Table(
    "application_subjects", metadata,
    Column("subject_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "application_id", Integer,
        ForeignKey("applications.application_id", ondelete="CASCADE"),
        nullable=False, index=True
    ),
    Column("subject_name", String(200), nullable=False),
    Column("grade", String(5), nullable=False),
)

application_experiences = Table(
    "application_experiences", metadata,
    Column("experience_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "application_id", Integer,
        ForeignKey("applications.application_id", ondelete="CASCADE"),
        nullable=False, index=True
    ),
    Column("company_name", String(200), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=True),  # NULL = current position
    Column("duties", Text, nullable=False),
)

admins = Table(
    "admins", metadata,
    Column("admin_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("password_hash", String(200), nullable=False),
    Column("name", String(200), nullable=True),
    Column("role", String(20), nullable=False, server_default="admin"),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


def create_tables(engine: Engine) -> None:
    """Create all tables that don't exist yet."""
    metadata.create_all(engine)


def drop_tables(engine: Engine) -> None:
    """Drop all tables (tests only)."""
    metadata.drop_all(engine)


def seed_default_admin(engine: Engine) -> bool:
    """
    Insert the configured default admin if no admin with that email exists.

    Returns:
        True if an admin was inserted
    """
    settings = get_settings()
    email = settings.default_admin_email.lower()

    with engine.begin() as conn:
        existing = conn.execute(
            text("SELECT admin_id FROM admins WHERE email = :email"),
            {"email": email}
        ).fetchone()
        if existing:
            return False

        conn.execute(
            text("""
                INSERT INTO admins (email, password_hash, name, role, is_active)
                VALUES (:email, :password_hash, :name, 'admin', :is_active)
            """),
            {
                "email": email,
                "password_hash": hash_password(settings.default_admin_password),
                "name": settings.default_admin_name,
                "is_active": True
            }
        )

    logger.info("Seeded default admin %s", email)
    if settings.default_admin_password == DEFAULT_ADMIN_PASSWORD:
        logger.warning(
            "Default admin %s was seeded with the built-in password; "
            "set DEFAULT_ADMIN_PASSWORD before deploying", email
        )
    return True


def init_schema(engine: Engine) -> None:
    """
    Create tables and seed the default admin.
    Call this once during app startup.
    """
    create_tables(engine)
    seed_default_admin(engine)
    logger.info("Database schema initialized")
