"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, the same way the rest of the project avoids a
dedicated settings library.  Defaults are provided for all fields so
the service starts with no configuration at all.  Tests build their
own ``Settings`` instance and pass it to ``create_app`` instead of
touching the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "PACE Student Registry")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Path of the append-only student log.  Relative paths are resolved
    # against the project root by ``get_database_path``.
    database_file: str = os.getenv("DATABASE_FILE", "pace_students_db.txt")

    # Registration page served at ``/``.  Resolved like ``database_file``.
    index_html: str = os.getenv("INDEX_HTML", "index.html")

    # Call ``os.fsync`` after every append so that a reported success
    # survives a crash of the host, not only of the process.
    fsync: bool = _env_flag("FSYNC", "true")

    # When true a failed durable append fails the registration.  When
    # false the failure is only logged and the record is kept in memory.
    strict_persistence: bool = _env_flag("STRICT_PERSISTENCE", "true")

    # Size of the thread pool running the synchronous request handlers.
    worker_threads: int = int(os.getenv("WORKER_THREADS", "40"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()


def resolve_path(path: str) -> str:
    """Resolve ``path`` against the project root unless it is absolute."""
    if os.path.isabs(path):
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / path).resolve())
