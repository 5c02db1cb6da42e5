"""
Error types raised by the registry and their HTTP mapping.

Services raise subclasses of ``RegistryError``; each carries a stable
``error_code`` (reported to clients as ``code``) and the HTTP status
the transport layer should use.  ``setup_error_handlers`` installs
FastAPI exception handlers so that no request failure escapes as an
unhandled exception: every error becomes a ``RegistrationResult``
envelope and the process keeps serving.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pace_registry_api.app.schemas.student import RegistrationResult

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base class for registration and storage failures."""

    error_code = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldsError(RegistryError):
    error_code = "MissingFields"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing fields: usn, name and email are required"


class InvalidEmailDomainError(RegistryError):
    error_code = "InvalidEmailDomain"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Use your college email (4pa...@pace.edu.in)"


class DuplicateUsnError(RegistryError):
    error_code = "DuplicateUsn"
    status_code = status.HTTP_409_CONFLICT
    default_message = "USN already registered"


class DuplicateEmailError(RegistryError):
    error_code = "DuplicateEmail"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class MalformedTextError(RegistryError):
    """A field holds text that cannot be stored as UTF-8."""

    default_message = "Malformed request payload"


class PersistenceError(RegistryError):
    """The student log could not be written."""

    default_message = "Could not save the registration"


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    body = RegistrationResult(status="error", code=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def setup_error_handlers(app: FastAPI) -> None:
    """Install handlers turning every failure into an error envelope."""

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.error_code, exc.message)
        return error_response(exc.error_code, exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed payloads are reported as a generic failure.
        logger.warning("Malformed payload for %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(
            "InternalError",
            "Malformed request payload",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            "InternalError",
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
