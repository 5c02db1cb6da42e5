"""
Shared FastAPI dependencies.

The store and the settings live on ``app.state`` (set by
``create_app``) so that each application instance, including the ones
built by tests, works on its own student log.
"""

from fastapi import Request

from pace_registry_api.app.core.config import Settings
from pace_registry_api.app.services.student_store import StudentStore


def get_store(request: Request) -> StudentStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
