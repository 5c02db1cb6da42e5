"""
Read-only search over registered students.
"""

from __future__ import annotations

from typing import List, Optional

from pace_registry_api.app.schemas.student import StudentRecord
from pace_registry_api.app.services.student_store import StudentStore


class SearchService:
    """Substring search on student names and skills."""

    def __init__(self, store: StudentStore) -> None:
        self.store = store

    def search(self, term: Optional[str] = "") -> List[StudentRecord]:
        """Return students whose skills or name contain ``term``.

        Matching ignores case.  Results keep registration order and an
        empty term matches everyone.
        """
        needle = (term or "").lower()
        return [
            record
            for record in self.store.snapshot()
            if needle in record.skills.lower() or needle in record.name.lower()
        ]
