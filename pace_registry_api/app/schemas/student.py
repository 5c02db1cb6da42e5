"""
Student record and its API representations.

``StudentRecord`` is the value stored in memory and in the student
log.  It is a frozen dataclass: once a record is visible to readers it
never changes.  The Pydantic models describe the HTTP payloads and are
kept separate from the stored record so the wire format can evolve
without touching persistence.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class StudentRecord:
    """A registered student.

    ``usn`` and ``email`` are the uniqueness keys; both are compared
    case-insensitively.
    """

    usn: str
    name: str
    email: str
    skills: str = ""


class StudentCreate(BaseModel):
    """Registration payload.

    Every field defaults to an empty string so that an absent field is
    reported as a missing field by the registration service rather than
    rejected by schema validation.
    """

    usn: Optional[str] = Field("", examples=["4PA21CS001"])
    name: Optional[str] = Field("", examples=["Asha"])
    email: Optional[str] = Field("", examples=["4pa21cs001@pace.edu.in"])
    skills: Optional[str] = Field("", examples=["go, rust"])


class StudentRead(BaseModel):
    """A search result item."""

    name: str
    usn: str
    email: str
    skills: str

    @classmethod
    def from_record(cls, record: StudentRecord) -> "StudentRead":
        # Double quotes in skills are shown as single quotes to clients;
        # the stored value is left untouched.
        return cls(
            name=record.name,
            usn=record.usn,
            email=record.email,
            skills=record.skills.replace('"', "'"),
        )


class RegistrationResult(BaseModel):
    """Outcome envelope returned by the register endpoint.

    ``status`` is ``"ok"`` or ``"error"``; ``code`` is one of
    ``Success``, ``MissingFields``, ``InvalidEmailDomain``,
    ``DuplicateUsn``, ``DuplicateEmail`` or ``InternalError``.
    """

    status: str = Field(..., examples=["ok"])
    code: str = Field(..., examples=["Success"])
    message: str = Field(..., examples=["Saved successfully"])
