"""PACE Student Registry API client.

A thin wrapper around the registry's HTTP API built on the
``requests`` library.  It is used by the command line tool and can be
used by any script that needs to register or look up students:

* :meth:`PaceRegistryClient.register` – register a student.
* :meth:`PaceRegistryClient.search` – search students by name or skill.

Every method returns a ``(data, error)`` tuple instead of raising.  On
failure ``error`` is a dictionary with the keys ``status_code``,
``code`` and ``message``; ``code`` is the registry's error code (for
example ``DuplicateUsn``) when the server sent one.

Duplicate USNs and emails come back with HTTP 409.  Older registry
servers answered duplicates with 400, the same status as validation
errors, so callers that need to tell the two apart should branch on
``error["code"]`` rather than on ``status_code``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)


class PaceRegistryClient:
    """Client for the registry's JSON endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "/api",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8080``.
            api_prefix: Prefix the JSON endpoints are mounted under.
            timeout: Request timeout in seconds.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + "/" + api_prefix.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            code = None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    code = err_json.get("code")
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "code": code, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Student operations
    # ------------------------------------------------------------------
    def register(
        self, usn: str, name: str, email: str, skills: str = ""
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Register a student.

        Returns:
            A tuple ``(result, error)`` where ``result`` is the server's
            success envelope.  A taken USN or email gives an error with
            ``status_code`` 409 and ``code`` ``DuplicateUsn`` or
            ``DuplicateEmail``.
        """
        payload = {"usn": usn, "name": name, "email": email, "skills": skills}
        return self._request("POST", "/register", json_body=payload)

    def search(self, term: str = "") -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Search students by name or skill.

        Returns:
            A tuple ``(students, error)``. ``students`` is empty on failure.
        """
        data, error = self._request("GET", "/search", params={"term": term})
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None
