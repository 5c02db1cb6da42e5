"""
Browser page.

Serves the registration form at ``/``.  The page is a static file whose
location comes from ``settings.index_html``; it talks to the JSON
endpoints under the API prefix.
"""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, HTMLResponse

from pace_registry_api.app.api.deps import get_settings
from pace_registry_api.app.core.config import Settings, resolve_path

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index_page(settings: Settings = Depends(get_settings)):
    path = resolve_path(settings.index_html)
    if not os.path.isfile(path):
        return HTMLResponse("<h1>Error: index.html not found!</h1>", status_code=404)
    return FileResponse(path, media_type="text/html")
