"""
In-memory student store backed by the append-only student log.

``StudentStore`` is the only owner of the registered students.  All
admissions go through one lock that covers the duplicate checks, the
durable append and the in-memory publish, so two concurrent
registrations with the same USN or email can never both succeed and
the log order always matches the memory order.

Readers never take the lock.  The collection is an immutable tuple that
is replaced, not mutated, on every admission; a reader holding a
snapshot keeps seeing exactly the students that existed when it was
taken.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Sequence, Tuple

from pace_registry_api.app.core.errors import (
    DuplicateEmailError,
    DuplicateUsnError,
    PersistenceError,
)
from pace_registry_api.app.core.storage import StudentLog
from pace_registry_api.app.schemas.student import StudentRecord

logger = logging.getLogger(__name__)


class StudentStore:
    """Authoritative ordered collection of registered students.

    Parameters
    ----------
    log : StudentLog
        Durable mirror of the collection.
    strict_persistence : bool
        If true (the default) a failed append rejects the admission
        with ``PersistenceError``.  If false the failure is logged and
        the student is kept in memory only.
    """

    def __init__(self, log: StudentLog, strict_persistence: bool = True) -> None:
        self.log = log
        self.strict_persistence = strict_persistence
        self._lock = threading.Lock()
        self._records: Tuple[StudentRecord, ...] = ()
        # Number of log lines the last load skipped for repeating a key.
        self.skipped_duplicates = 0

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _find_usn(records: Sequence[StudentRecord], usn: str) -> bool:
        key = usn.upper()
        return any(r.usn.upper() == key for r in records)

    @staticmethod
    def _find_email(records: Sequence[StudentRecord], email: str) -> bool:
        key = email.lower()
        return any(r.email.lower() == key for r in records)

    def contains_usn(self, usn: str) -> bool:
        """Return whether a student with this USN exists (case-insensitive)."""
        return self._find_usn(self._records, usn)

    def contains_email(self, email: str) -> bool:
        """Return whether a student with this email exists (case-insensitive)."""
        return self._find_email(self._records, email)

    def snapshot(self) -> Tuple[StudentRecord, ...]:
        """Return the students in registration order as of now."""
        return self._records

    def admit(self, record: StudentRecord) -> None:
        """Add a new student to memory and to the log as one unit.

        Raises ``DuplicateUsnError`` or ``DuplicateEmailError`` if a
        key is taken, and ``PersistenceError`` if the log write fails in
        strict mode.  Nothing is changed when an error is raised.
        """
        with self._lock:
            records = self._records
            if self._find_usn(records, record.usn):
                raise DuplicateUsnError()
            if self._find_email(records, record.email):
                raise DuplicateEmailError()
            try:
                self.log.append(record)
            except PersistenceError:
                if self.strict_persistence:
                    raise
                logger.error("Student %s kept in memory only; log append failed", record.usn)
            self._records = records + (record,)

    def load(self) -> int:
        """Rebuild the collection from the log.

        Any previous contents are discarded, so loading twice gives the
        same result as loading once.  Lines whose USN or email repeats
        an earlier line are skipped and counted in
        ``skipped_duplicates``.  Returns the number of students loaded.
        """
        with self._lock:
            loaded: List[StudentRecord] = []
            duplicates = 0
            for record in self.log.replay():
                if self._find_usn(loaded, record.usn) or self._find_email(loaded, record.email):
                    logger.warning("Skipping duplicate student %s in %s", record.usn, self.log.path)
                    duplicates += 1
                    continue
                loaded.append(record)
            self._records = tuple(loaded)
            self.skipped_duplicates = duplicates
        logger.info("Loaded %d students from %s", len(loaded), self.log.path)
        return len(loaded)
