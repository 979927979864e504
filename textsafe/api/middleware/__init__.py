"""Middleware package for the application."""

from textsafe.api.middleware.request_logging import RequestLoggingMiddleware
from textsafe.api.middleware.security_headers import (
    SECURITY_HEADERS,
    SecurityHeadersMiddleware,
)

__all__ = ["RequestLoggingMiddleware", "SecurityHeadersMiddleware", "SECURITY_HEADERS"]
