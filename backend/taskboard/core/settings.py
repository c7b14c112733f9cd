"""Application settings and configuration utilities."""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env(name: str, default: str | None = None):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass(frozen=True)
class Settings:
    """Immutable application settings derived from environment variables."""

    project_name: str = _env("PROJECT_NAME", "Taskboard API")
    version: str = _env("PROJECT_VERSION", "1.0.0")
    api_prefix: str = _env("API_PREFIX", "/api")
    environment: str = _env("ENVIRONMENT", "local")
    log_level: str = _env("LOG_LEVEL", "INFO")

    # Comma separated list, "*" allows every origin
    cors_origins: str = _env("CORS_ORIGINS", "*")

    # How identifiers from the URL map onto the primary key: dual, integer or text
    task_id_mode: str = _env("TASK_ID_MODE", "dual")

    database_url_override: str | None = _env("DATABASE_URL")

    @property
    def database_path(self) -> str:
        """Return path to SQLite database file."""
        db_path = os.getenv("DATABASE_PATH")
        if db_path:
            return db_path
        # Default: taskboard.db in backend directory
        backend_dir = Path(__file__).parent.parent.parent
        return str(backend_dir / "taskboard.db")

    @property
    def database_url(self) -> str:
        """Return the SQLAlchemy URL, falling back to the local SQLite file."""
        if self.database_url_override:
            return self.database_url_override
        return f"sqlite:///{self.database_path}"

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
