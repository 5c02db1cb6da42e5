"""
Main entrypoint for the PACE Student Registry API.

This module assembles the FastAPI application: it sets up logging,
creates the student store on top of its append-only log, installs the
error handlers and includes the routers.  ``create_app`` builds and
configures an app, which is then instantiated at module import time as
``app`` so it can be served with uvicorn, e.g.::

    uvicorn pace_registry_api.app.main:app

The log is replayed into the store when the application starts, before
the first request is accepted.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import anyio.to_thread
from fastapi import FastAPI

from .api.v1.router import pages_router, router as v1_router
from .core.config import Settings, resolve_path, settings
from .core.errors import setup_error_handlers
from .core.logging_config import setup_logging
from .core.storage import StudentLog
from .services.student_store import StudentStore

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment-derived module
        defaults.  Tests pass their own to point the store at a
        temporary log file.

    Returns
    -------
    FastAPI
        A configured FastAPI instance with its own ``StudentStore`` on
        ``app.state.store``.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the store and
    # the startup hook can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    log = StudentLog(resolve_path(app_settings.database_file), fsync=app_settings.fsync)
    store = StudentStore(log, strict_persistence=app_settings.strict_persistence)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Request handlers are synchronous and run on this pool.
        anyio.to_thread.current_default_thread_limiter().total_tokens = app_settings.worker_threads
        count = store.load()
        logger.info(
            "%s started with %d students (log: %s)",
            app_settings.project_name,
            count,
            log.path,
        )
        yield
        logger.info("%s is shutting down", app_settings.project_name)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.store = store

    setup_error_handlers(app)

    app.include_router(v1_router, prefix=app_settings.api_prefix)
    app.include_router(pages_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
