"""
Student endpoints for API v1.

``POST /register`` admits a new student and ``GET /search`` lists the
students whose name or skills contain a term.  Both handlers are plain
``def`` functions: FastAPI runs them on its worker thread pool, so many
requests are served in parallel and the store's lock is never held on
the event loop.

Failures are raised as ``RegistryError`` subclasses and turned into
error envelopes by the handlers in ``core.errors``.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from pace_registry_api.app.api.deps import get_store
from pace_registry_api.app.schemas.student import RegistrationResult, StudentCreate, StudentRead
from pace_registry_api.app.services.registration_service import RegistrationService
from pace_registry_api.app.services.search_service import SearchService
from pace_registry_api.app.services.student_store import StudentStore

router = APIRouter()


@router.post("/register", response_model=RegistrationResult)
def register_student(
    student: StudentCreate,
    store: StudentStore = Depends(get_store),
) -> RegistrationResult:
    """Register a student.

    Returns ``{"status": "ok", "code": "Success"}`` on success.  Errors
    use the same envelope with ``status`` set to ``"error"``:
    ``MissingFields`` and ``InvalidEmailDomain`` (400), ``DuplicateUsn``
    and ``DuplicateEmail`` (409), ``InternalError`` (500).
    """
    record = RegistrationService(store).register(
        student.usn, student.name, student.email, student.skills
    )
    return RegistrationResult(status="ok", code="Success", message=f"Saved {record.name}")


@router.get("/search", response_model=List[StudentRead])
def search_students(
    term: str = Query("", description="Case-insensitive substring of a name or skills list"),
    store: StudentStore = Depends(get_store),
) -> List[StudentRead]:
    """Return matching students in registration order.

    An empty ``term`` returns every student.
    """
    return [StudentRead.from_record(r) for r in SearchService(store).search(term)]
