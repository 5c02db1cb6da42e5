"""
Top-level package for the PACE Student Registry.

The HTTP service lives in the ``app`` subpackage
(``pace_registry_api.app.main:app``).  ``PaceRegistryClient`` is a
small client for talking to a running service.
"""

from .client import PaceRegistryClient

__all__ = ["PaceRegistryClient"]
