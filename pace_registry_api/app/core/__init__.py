"""
Core infrastructure: settings, logging, error types and the
append-only student log.
"""
