from pathlib import Path
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from pace_registry_api.app.core.config import Settings
from pace_registry_api.app.core.storage import StudentLog
from pace_registry_api.app.main import create_app
from pace_registry_api.app.services.student_store import StudentStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of the student log for one test."""
    return tmp_path / "students_db.txt"


@pytest.fixture
def student_log(db_path: Path) -> StudentLog:
    return StudentLog(str(db_path), fsync=False)


@pytest.fixture
def store(student_log: StudentLog) -> StudentStore:
    """An empty store writing to the temporary log."""
    return StudentStore(student_log)


@pytest.fixture
def test_settings(tmp_path: Path, db_path: Path) -> Settings:
    return Settings(
        database_file=str(db_path),
        index_html=str(tmp_path / "index.html"),
        fsync=False,
        log_level="WARNING",
    )


@pytest.fixture
def client(test_settings: Settings):
    """A TestClient whose app has replayed the temporary log."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def student_payload() -> Callable[..., Dict[str, str]]:
    """Factory for valid registration payloads, numbered to stay unique."""

    def _make(n: int = 1, **overrides: str) -> Dict[str, str]:
        payload = {
            "usn": f"4PA21CS{n:03d}",
            "name": f"Student {n}",
            "email": f"4pa21cs{n:03d}@pace.edu.in",
            "skills": "python, sql",
        }
        payload.update(overrides)
        return payload

    return _make
