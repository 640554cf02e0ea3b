"""Configuration for environment variables and runtime knobs.

Provides a simple config object with the persistence backend, the active
point filter, the database location and the API prefix. This keeps the rest
of the codebase decoupled from direct env access.
"""

from __future__ import annotations

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Base
    BLUEPRINTS_ENV = os.getenv("BLUEPRINTS_ENV", "dev")
    DATA_DIR = os.getenv("BLUEPRINTS_DATA_DIR", os.path.abspath(os.path.join(os.getcwd(), "data")))
    DB_DIR = os.path.join(DATA_DIR, "db")

    # Persistence backend: "memory" or "sql" ("postgres" is accepted as an alias)
    PERSISTENCE = os.getenv("BLUEPRINTS_PERSISTENCE", "memory")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(DB_DIR, "blueprints.db"))
    SQL_ECHO = _env_flag("SQL_ECHO", "false")
    SEED_SAMPLE_DATA = _env_flag("BLUEPRINTS_SEED_SAMPLE_DATA", "true")

    # Exactly one filter is applied to GET /blueprints/{author}/{name}
    FILTER = os.getenv("BLUEPRINTS_FILTER", "identity")

    # HTTP
    API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def ensure_data_dirs(cfg: Config = Config) -> None:
    """Ensure required data directories exist."""
    for p in [cfg.DATA_DIR, cfg.DB_DIR]:
        os.makedirs(p, exist_ok=True)
