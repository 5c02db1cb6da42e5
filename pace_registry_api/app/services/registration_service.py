"""
Business logic for student registration.

``RegistrationService`` turns four untrusted strings into a
``StudentRecord`` and admits it into the store.  Checks run in a fixed
order and stop at the first failure:

1. Every field must be encodable as UTF-8 (no lone surrogates).
2. ``usn``, ``name`` and ``email`` must be non-empty after trimming.
3. ``email`` must be a college address (``4pa...@pace.edu.in``).
4. The store must accept the record (unique USN, unique email).

A rejected registration is final; the client has to submit again.
"""

from __future__ import annotations

import logging
from typing import Optional

from pace_registry_api.app.core.errors import (
    InvalidEmailDomainError,
    MalformedTextError,
    MissingFieldsError,
)
from pace_registry_api.app.schemas.student import StudentRecord
from pace_registry_api.app.services.student_store import StudentStore

logger = logging.getLogger(__name__)

# College email rule.  Not configurable.
EMAIL_PREFIX = "4pa"
EMAIL_DOMAIN = "@pace.edu.in"


def normalize(
    usn: Optional[str],
    name: Optional[str],
    email: Optional[str],
    skills: Optional[str],
) -> StudentRecord:
    """Trim all fields, uppercase the USN and lowercase the email."""
    return StudentRecord(
        usn=(usn or "").strip().upper(),
        name=(name or "").strip(),
        email=(email or "").strip().lower(),
        skills=(skills or "").strip(),
    )


def is_encodable(record: StudentRecord) -> bool:
    try:
        for value in (record.usn, record.name, record.email, record.skills):
            value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_college_email(email: str) -> bool:
    return email.startswith(EMAIL_PREFIX) and email.endswith(EMAIL_DOMAIN)


class RegistrationService:
    """Validate and admit new students into a ``StudentStore``."""

    def __init__(self, store: StudentStore) -> None:
        self.store = store

    def register(
        self,
        usn: Optional[str],
        name: Optional[str],
        email: Optional[str],
        skills: Optional[str] = "",
    ) -> StudentRecord:
        """Register a student and return the stored record.

        Raises ``MalformedTextError``, ``MissingFieldsError``,
        ``InvalidEmailDomainError``, ``DuplicateUsnError``,
        ``DuplicateEmailError`` or ``PersistenceError``.
        """
        record = normalize(usn, name, email, skills)
        if not is_encodable(record):
            raise MalformedTextError()
        if not record.usn or not record.name or not record.email:
            raise MissingFieldsError()
        if not is_college_email(record.email):
            raise InvalidEmailDomainError()
        self.store.admit(record)
        logger.info("Registered student %s (%s)", record.usn, record.name)
        return record
