"""Router errors.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Optional


class RouterError(Exception):
    """Base class for errors that end a dispatch cycle with an error response."""

    status: int = 500

    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class AuthError(RouterError):
    """CSRF verification failed for an unsafe request."""

    status = 403


class MiddlewareError(RouterError):
    """A middleware rejected the request."""

    status = 403

    def __init__(
        self,
        message: str = "",
        status: Optional[int] = None,
        middleware: str = "",
    ):
        super().__init__(message, status)
        self.middleware = middleware


class UnknownMiddlewareError(RouterError):
    """A route references a middleware name that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown middleware: {name}")
        self.name = name


class UnregisteredHandlerError(RouterError):
    """A handler string does not resolve to a registered controller method."""

    def __init__(self, key: str):
        super().__init__(f"Unregistered handler: {key}")
        self.key = key


__all__ = [
    "RouterError",
    "AuthError",
    "MiddlewareError",
    "UnknownMiddlewareError",
    "UnregisteredHandlerError",
]
