"""
Application Repository - persistence for applications, subjects and experiences.

The scoring and ranking services only talk to the database through this
class. It wraps a SQLAlchemy Session handed in by the caller (a route's
`Depends(get_db)` or `get_db_session()` in scripts); committing is the
caller's job.
"""

from typing import Dict, List, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.orm import Session

from app.models.applicant import Applicant, Subject, Experience


APPLICATION_COLUMNS = """
    application_id, name, address, phone, email, dob, region,
    certification, ai_score, created_at
"""


def _value(enum_or_str) -> Optional[str]:
    return getattr(enum_or_str, "value", enum_or_str)


def _date_param(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class ApplicationRepository:
    """
    Reads and writes application rows.

    Usage:
        with get_db_session() as db:
            repo = ApplicationRepository(db)
            applicants = repo.fetch_applicants("Region 4")
    """

    def __init__(self, db: Session):
        self.db = db

    # --------------------------------------------------------
    # Reads
    # --------------------------------------------------------

    def fetch_applicants(self, region: Optional[str] = None) -> List[Applicant]:
        """All applications, newest first, optionally filtered by region."""
        sql = f"SELECT {APPLICATION_COLUMNS} FROM applications"
        params = {}

        if region:
            sql += " WHERE region = :region"
            params["region"] = _value(region)

        sql += " ORDER BY created_at DESC, application_id DESC"
        result = self.db.execute(text(sql), params)

        return [Applicant(**row) for row in result.mappings().all()]

    def get_applicant(self, application_id: int) -> Optional[Applicant]:
        row = self.db.execute(
            text(f"SELECT {APPLICATION_COLUMNS} FROM applications WHERE application_id = :id"),
            {"id": application_id}
        ).mappings().fetchone()
        return Applicant(**row) if row else None

    def fetch_subjects(self, application_id: int) -> List[Subject]:
        result = self.db.execute(
            text("""
                SELECT subject_id, application_id, subject_name, grade
                FROM application_subjects
                WHERE application_id = :id ORDER BY subject_id
            """),
            {"id": application_id}
        )
        return [Subject(**row) for row in result.mappings().all()]

    def fetch_experiences(self, application_id: int) -> List[Experience]:
        result = self.db.execute(
            text("""
                SELECT experience_id, application_id, company_name, start_date, end_date, duties
                FROM application_experiences
                WHERE application_id = :id ORDER BY start_date, experience_id
            """),
            {"id": application_id}
        )
        return [Experience(**row) for row in result.mappings().all()]

    def fetch_subjects_by_application(self, application_ids: List[int]) -> Dict[int, List[Subject]]:
        """application_id -> subjects, for many applications in one query."""
        grouped: Dict[int, List[Subject]] = {app_id: [] for app_id in application_ids}
        if not grouped:
            return grouped

        statement = text("""
            SELECT subject_id, application_id, subject_name, grade
            FROM application_subjects
            WHERE application_id IN :ids ORDER BY application_id, subject_id
        """).bindparams(bindparam("ids", expanding=True))

        for row in self.db.execute(statement, {"ids": list(grouped)}).mappings():
            grouped[row["application_id"]].append(Subject(**row))
        return grouped

    def fetch_experiences_by_application(self, application_ids: List[int]) -> Dict[int, List[Experience]]:
        """application_id -> experiences, for many applications in one query."""
        grouped: Dict[int, List[Experience]] = {app_id: [] for app_id in application_ids}
        if not grouped:
            return grouped

        statement = text("""
            SELECT experience_id, application_id, company_name, start_date, end_date, duties
            FROM application_experiences
            WHERE application_id IN :ids ORDER BY application_id, start_date, experience_id
        """).bindparams(bindparam("ids", expanding=True))

        for row in self.db.execute(statement, {"ids": list(grouped)}).mappings():
            grouped[row["application_id"]].append(Experience(**row))
        return grouped

    def email_exists(self, email: str) -> bool:
        row = self.db.execute(
            text("SELECT application_id FROM applications WHERE LOWER(email) = :email"),
            {"email": email.lower()}
        ).fetchone()
        return row is not None

    def phone_exists(self, phone: str) -> bool:
        row = self.db.execute(
            text("SELECT application_id FROM applications WHERE phone = :phone"),
            {"phone": phone}
        ).fetchone()
        return row is not None

    def count_by_region(self) -> Dict[str, int]:
        """region -> number of applications (regions without applications omitted)."""
        result = self.db.execute(
            text("SELECT region, COUNT(*) AS total FROM applications GROUP BY region ORDER BY region")
        )
        return {row[0]: row[1] for row in result.fetchall()}

    # --------------------------------------------------------
    # Writes
    # --------------------------------------------------------

    def create_application(self, data) -> Applicant:
        """
        Insert an application with its subjects and experiences.

        Args:
            data: Validated ApplicationCreate

        Returns:
            The stored Applicant (unscored)
        """
        result = self.db.execute(
            text("""
                INSERT INTO applications (name, address, phone, email, dob, region, certification)
                VALUES (:name, :address, :phone, :email, :dob, :region, :certification)
                RETURNING application_id
            """),
            {
                "name": data.name,
                "address": data.address,
                "phone": data.phone,
                "email": str(data.email).lower(),
                "dob": _date_param(data.dob),
                "region": _value(data.region),
                "certification": data.certification or ""
            }
        )
        application_id = result.fetchone()[0]

        for subject in data.subjects:
            self.db.execute(
                text("""
                    INSERT INTO application_subjects (application_id, subject_name, grade)
                    VALUES (:application_id, :subject_name, :grade)
                """),
                {
                    "application_id": application_id,
                    "subject_name": subject.subject_name,
                    "grade": _value(subject.grade)
                }
            )

        for experience in data.experiences:
            self.db.execute(
                text("""
                    INSERT INTO application_experiences
                        (application_id, company_name, start_date, end_date, duties)
                    VALUES (:application_id, :company_name, :start_date, :end_date, :duties)
                """),
                {
                    "application_id": application_id,
                    "company_name": experience.company_name,
                    "start_date": _date_param(experience.start_date),
                    "end_date": _date_param(experience.end_date),
                    "duties": experience.duties
                }
            )

        return self.get_applicant(application_id)

    def persist_score(self, application_id: int, score: int) -> bool:
        """Store a computed score. Returns False if the application doesn't exist."""
        result = self.db.execute(
            text("UPDATE applications SET ai_score = :score WHERE application_id = :id"),
            {"score": score, "id": application_id}
        )
        return result.rowcount > 0


def get_application_repository(db: Session) -> ApplicationRepository:
    """Get repository bound to a session."""
    return ApplicationRepository(db)
