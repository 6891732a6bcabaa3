"""
Database module - SQLAlchemy engine, sessions and schema.
"""
from app.db.database import get_db, get_db_session, test_database_connection

__all__ = [
    "get_db",
    "get_db_session",
    "test_database_connection"
]
