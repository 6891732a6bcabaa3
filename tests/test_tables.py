"""
Tests for db/tables.py - schema setup and the seeded admin.
"""

import logging

from sqlalchemy import text

from app.core.config import get_settings
from app.db.database import engine
from app.db.tables import drop_tables, create_tables, seed_default_admin


class TestSeedDefaultAdmin:
    """Test seeding of the default admin account."""

    def test_seed_is_idempotent(self):
        assert seed_default_admin(engine) is False

        with engine.connect() as conn:
            count = conn.execute(text("SELECT COUNT(*) FROM admins")).scalar()
        assert count == 1

    def test_warns_about_builtin_password(self, caplog):
        drop_tables(engine)
        create_tables(engine)

        with caplog.at_level(logging.WARNING, logger="app.db.tables"):
            assert seed_default_admin(engine) is True

        assert "built-in password" in caplog.text

    def test_no_warning_with_configured_password(self, caplog, monkeypatch):
        monkeypatch.setattr(get_settings(), "default_admin_password", "Configured-Pass-42")
        drop_tables(engine)
        create_tables(engine)

        with caplog.at_level(logging.WARNING, logger="app.db.tables"):
            assert seed_default_admin(engine) is True

        assert "built-in password" not in caplog.text
