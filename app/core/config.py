"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

# Built-in password for the seeded admin; only meant for local runs
DEFAULT_ADMIN_PASSWORD = "password"


class Settings(BaseSettings):
    # Full SQLAlchemy URL (e.g. sqlite:///./its.db). Overrides the PostgreSQL parts below.
    database_url: str = ""

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "its_user"
    postgres_password: str = "password"
    postgres_db: str = "its_applications"

    # JWT Auth for the admin area
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Seeded on first startup if no admin with this email exists
    default_admin_email: str = "admin@moe.gov.gy"
    default_admin_password: str = DEFAULT_ADMIN_PASSWORD
    default_admin_name: str = "System Administrator"

    # App
    log_level: str = "INFO"
    debug: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL used to build the engine."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
