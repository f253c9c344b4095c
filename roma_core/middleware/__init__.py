"""Middleware module - Named request middleware."""

from roma_core.middleware.base import (
    CallableMiddleware,
    Middleware,
    MiddlewareChain,
    MiddlewareRegistry,
)
from roma_core.middleware.logging import AccessLogMiddleware, LoggingMiddleware

__all__ = [
    "Middleware",
    "CallableMiddleware",
    "MiddlewareChain",
    "MiddlewareRegistry",
    "LoggingMiddleware",
    "AccessLogMiddleware",
]
