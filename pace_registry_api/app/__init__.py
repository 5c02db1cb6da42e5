"""
Application package initializer.

This package contains the main entrypoint for the registry API and its
submodules: ``core`` (configuration, logging, errors and the student
log), ``schemas`` (the stored record and API payloads), ``services``
(the store and the registration and search rules) and ``api`` (the
HTTP routes, grouped by version).
"""

from .main import app  # noqa: F401
