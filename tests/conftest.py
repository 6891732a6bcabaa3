"""
Pytest configuration and shared fixtures.

The whole suite runs against an in-memory SQLite database; DATABASE_URL is
set before any app module is imported so the engine picks it up.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from datetime import date
from typing import Any, Dict

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.db.database import engine, get_db_session
from app.db.tables import drop_tables, init_schema
from app.main import app


@pytest.fixture(autouse=True)
def fresh_database():
    """Empty schema plus the default admin for every test."""
    drop_tables(engine)
    init_schema(engine)
    yield
    drop_tables(engine)


@pytest.fixture
def db_session():
    """Session that commits when the test body finishes."""
    with get_db_session() as session:
        yield session


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_token(client) -> str:
    """JWT for the seeded default admin."""
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"email": settings.default_admin_email, "password": settings.default_admin_password}
    )
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def auth_headers(admin_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def application_payload():
    """
    Factory for a valid application form body.

    Default scoring: Mathematics 1 + English A 2 (30), Information
    Technology 1 (30), CompTIA A+ (20), one helpdesk job with
    "helpdesk" + "printer" (6) = 86.
    """
    counter = {"n": 0}

    def _make(**overrides) -> Dict[str, Any]:
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "name": f"Applicant {n}",
            "address": "12 Main Street, Georgetown",
            "phone": f"592600{n:04d}",
            "email": f"applicant{n}@example.com",
            "dob": "1998-04-12",
            "region": "Region 4",
            "certification": "CompTIA A+",
            "subjects": [
                {"subject_name": "Mathematics", "grade": "1"},
                {"subject_name": "English A", "grade": "2"},
                {"subject_name": "Information Technology", "grade": "1"},
                {"subject_name": "Social Studies", "grade": "3"},
                {"subject_name": "Biology", "grade": "2"},
            ],
            "experiences": [
                {
                    "company_name": "Guyana Power & Light",
                    "start_date": "2020-01-01",
                    "end_date": "2021-07-01",
                    "duties": "Helpdesk calls and printer setup",
                }
            ],
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def today() -> date:
    return date(2025, 6, 15)
