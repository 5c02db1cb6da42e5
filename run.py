"""Entry point for the PACE Student Registry service.

Starts the FastAPI application under Uvicorn.  Host, port, the student
log location and the other options are read from environment variables
(see ``pace_registry_api/app/core/config.py``), for example::

    PORT=8080 DATABASE_FILE=pace_students_db.txt python run.py

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from pace_registry_api.app.core.config import settings
from pace_registry_api.app.main import app


async def run_api() -> None:
    """Serve the registry API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Registry listening on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
