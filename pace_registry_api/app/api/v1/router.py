"""
Top-level routers for version 1 of the API.

``router`` holds the JSON endpoints and is mounted under
``settings.api_prefix``.  ``pages_router`` holds the browser page and
is mounted at the root.
"""

from fastapi import APIRouter

from .endpoints import pages, students

router = APIRouter()
router.include_router(students.router, tags=["students"])

pages_router = APIRouter()
pages_router.include_router(pages.router)
