"""
Tests for application_repository.py - SQL persistence.
"""

import pytest
from datetime import date

from sqlalchemy import text

from app.services.application_repository import ApplicationRepository
from app.schemas.schemas import ApplicationCreate


@pytest.fixture
def repository(db_session) -> ApplicationRepository:
    return ApplicationRepository(db_session)


class TestCreateApplication:
    """Test inserting applications."""

    def test_stores_all_parts(self, repository, application_payload):
        stored = repository.create_application(ApplicationCreate(**application_payload()))

        assert stored.application_id > 0
        assert stored.region == "Region 4"
        assert stored.dob == date(1998, 4, 12)
        assert stored.ai_score is None
        assert stored.created_at is not None

        subjects = repository.fetch_subjects(stored.application_id)
        assert [s.subject_name for s in subjects][:3] == ["Mathematics", "English A", "Information Technology"]
        assert subjects[0].grade == "1"

        experiences = repository.fetch_experiences(stored.application_id)
        assert len(experiences) == 1
        assert experiences[0].start_date == date(2020, 1, 1)
        assert experiences[0].end_date == date(2021, 7, 1)

    def test_open_ended_experience(self, repository, application_payload):
        payload = application_payload(experiences=[
            {"company_name": "Acme", "start_date": "2023-02-01", "duties": "Support"}
        ])

        stored = repository.create_application(ApplicationCreate(**payload))

        assert repository.fetch_experiences(stored.application_id)[0].end_date is None

    def test_email_is_lowercased(self, repository, application_payload):
        stored = repository.create_application(
            ApplicationCreate(**application_payload(email="Mixed.Case@Example.com"))
        )
        assert stored.email == "mixed.case@example.com"


class TestQueries:
    """Test read helpers."""

    def test_fetch_newest_first(self, repository, application_payload):
        first = repository.create_application(ApplicationCreate(**application_payload()))
        second = repository.create_application(ApplicationCreate(**application_payload()))

        ids = [a.application_id for a in repository.fetch_applicants()]

        assert ids == [second.application_id, first.application_id]

    def test_fetch_by_region(self, repository, application_payload):
        repository.create_application(ApplicationCreate(**application_payload(region="Georgetown")))
        repository.create_application(ApplicationCreate(**application_payload(region="Region 9")))

        result = repository.fetch_applicants("Region 9")

        assert [a.region for a in result] == ["Region 9"]

    def test_duplicate_checks(self, repository, application_payload):
        payload = application_payload()
        repository.create_application(ApplicationCreate(**payload))

        assert repository.email_exists(payload["email"].upper())
        assert repository.phone_exists(payload["phone"])
        assert not repository.email_exists("someone.else@example.com")
        assert not repository.phone_exists("5929999999")

    def test_count_by_region(self, repository, application_payload):
        for region in ("Region 1", "Region 1", "Region 6"):
            repository.create_application(ApplicationCreate(**application_payload(region=region)))

        assert repository.count_by_region() == {"Region 1": 2, "Region 6": 1}

    def test_missing_application(self, repository):
        assert repository.get_applicant(12345) is None
        assert repository.fetch_subjects(12345) == []
        assert repository.fetch_experiences(12345) == []

    def test_children_fetched_in_bulk(self, repository, application_payload):
        first = repository.create_application(ApplicationCreate(**application_payload()))
        second = repository.create_application(ApplicationCreate(**application_payload(experiences=[])))
        ids = [first.application_id, second.application_id]

        subjects = repository.fetch_subjects_by_application(ids)
        experiences = repository.fetch_experiences_by_application(ids)

        assert [len(subjects[i]) for i in ids] == [5, 5]
        assert subjects[first.application_id][0].subject_name == "Mathematics"
        assert experiences[first.application_id][0].start_date == date(2020, 1, 1)
        assert experiences[second.application_id] == []

    def test_bulk_fetch_with_no_ids(self, repository):
        assert repository.fetch_subjects_by_application([]) == {}
        assert repository.fetch_experiences_by_application([]) == {}

    def test_unparseable_stored_date_is_kept_raw(self, repository, db_session, application_payload):
        stored = repository.create_application(ApplicationCreate(**application_payload()))
        db_session.execute(
            text("UPDATE application_experiences SET start_date = 'not-a-date' WHERE application_id = :id"),
            {"id": stored.application_id}
        )

        experience = repository.fetch_experiences(stored.application_id)[0]

        assert experience.start_date == "not-a-date"
        assert experience.end_date == date(2021, 7, 1)


class TestPersistScore:
    """Test score updates."""

    def test_persist_score(self, repository, application_payload):
        stored = repository.create_application(ApplicationCreate(**application_payload()))

        assert repository.persist_score(stored.application_id, 73) is True
        assert repository.get_applicant(stored.application_id).ai_score == 73

    def test_persist_score_unknown_id(self, repository):
        assert repository.persist_score(999, 10) is False
