"""
Application configuration. Loads from environment variables.
Secrets and sensitive config must never be hardcoded.
"""

import os

from dotenv import load_dotenv

load_dotenv()
from functools import lru_cache

# Audit attribution policies for migration progress entries.
ATTRIBUTION_FIRST_FOUND = "first_found"
ATTRIBUTION_NONE = "none"
_ATTRIBUTION_POLICIES = (ATTRIBUTION_FIRST_FOUND, ATTRIBUTION_NONE)


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "DailyReport"
    debug: bool = False
    log_level: str = "INFO"

    # Database (postgresql+psycopg for psycopg3; sqlite:// for local runs and tests)
    database_url: str = "postgresql+psycopg://localhost:5432/dailyreport_dev"
    db_connect_timeout: int = 10  # seconds

    # Security
    internal_job_token: str = ""  # Required for /internal/* endpoints

    # Migrations
    # first_found: attribute progress entries to the first org/user in the store.
    # none: always write unattributed (system) entries.
    migration_audit_attribution: str = ATTRIBUTION_FIRST_FOUND
    migration_stop_on_error: bool = False

    def __init__(self) -> None:
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()

        default_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
        default_url = (
            f"postgresql+psycopg://{default_user}:"
            f"{os.getenv('PGPASSWORD', '')}@"
            f"{os.getenv('PGHOST', 'localhost')}:"
            f"{os.getenv('PGPORT', '5432')}/"
            f"{os.getenv('PGDATABASE', 'dailyreport_dev')}"
        )
        raw_url = os.getenv("DATABASE_URL", default_url)
        # Ensure psycopg3 driver if URL uses generic postgresql://
        if raw_url.startswith("postgresql://") and not raw_url.startswith("postgresql+psycopg"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        self.database_url = raw_url
        self.db_connect_timeout = int(os.getenv("DB_CONNECT_TIMEOUT", str(self.db_connect_timeout)))

        self.internal_job_token = os.getenv("INTERNAL_JOB_TOKEN", "")

        attribution = os.getenv(
            "MIGRATION_AUDIT_ATTRIBUTION", self.migration_audit_attribution
        ).strip().lower()
        if attribution not in _ATTRIBUTION_POLICIES:
            attribution = ATTRIBUTION_FIRST_FOUND
        self.migration_audit_attribution = attribution
        self.migration_stop_on_error = (
            os.getenv("MIGRATION_STOP_ON_ERROR", "false").lower() == "true"
        )
