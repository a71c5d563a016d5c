"""Logging module with structured logging and request tracking."""

from backoffice.core.logging.config import configure_logging
from backoffice.core.logging.middleware import RequestLoggingMiddleware


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
