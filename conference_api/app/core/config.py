"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with an embedded SQLite store and no external services.
In a production deployment you should at least override
``SECRET_KEY`` and ``ADMIN_PASSWORD``.
"""

import os
from dataclasses import dataclass
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Conference API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Optional static token for automation.  Requests carrying this
    # token in the Authorization header are treated as the seeded
    # administrator without a login round trip.  Use with care.
    super_admin_static_token: str = os.getenv("SUPER_ADMIN_TOKEN", "")

    # Which RecordStore implementation to build at startup: ``json``
    # (one JSON array file per collection), ``sqlite`` (one row per
    # record) or ``mongo`` (MongoDB collections).
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Directory holding ``<collection>.json`` files for the JSON backend.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``resolve_path``.
    database_url: str = os.getenv("DATABASE_URL", "conference.db")

    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "conference")

    # Editable static pages and the directory receiving their backups.
    pages_dir: str = os.getenv("PAGES_DIR", "public")
    backup_dir: str = os.getenv("BACKUP_DIR", "backups")

    # Administrator account created at startup if it does not exist.
    # Leaving the password empty disables seeding.
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")

    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "true")


def resolve_path(value: str) -> Path:
    """Return ``value`` as an absolute path.

    Absolute paths are returned unchanged; relative ones are resolved
    against the project root so the API behaves the same regardless
    of the working directory it was started from.
    """
    path = Path(value)
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
