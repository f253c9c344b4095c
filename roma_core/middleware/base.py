"""Middleware Base - Named middleware and the per-route chain.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from roma_core.errors import MiddlewareError, UnknownMiddlewareError
from roma_core.http.request import Request, Response

logger = logging.getLogger(__name__)


class Middleware(ABC):
    """Abstract middleware base class.

    Middleware is attached to routes by name and runs after a route has
    been matched, right before its handler.

    Pipeline:
    ┌────────────────────────────────────────────────────────────┐
    │                  Middleware Pipeline                        │
    │                                                             │
    │  Request ──▶ MW1 ──▶ MW2 ──▶ ... ──▶ Handler               │
    │                                          │                  │
    │  Response ◀── MW1 ◀── MW2 ◀── ... ◀──────┘                 │
    └────────────────────────────────────────────────────────────┘
    """

    @abstractmethod
    def pre_request(self, request: Request) -> Optional[Response]:
        """Process request before the handler runs.

        Args:
            request: Request object

        Returns:
            Response to short-circuit, or None to continue

        Raises:
            MiddlewareError: to reject the request
        """
        pass

    @abstractmethod
    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Process response before sending.

        Args:
            request: Original request
            response: Response from handler

        Returns:
            Modified response or None
        """
        pass


class CallableMiddleware(Middleware):
    """Adapt a plain function into middleware.

    The function receives the request. Returning ``False`` rejects it,
    returning a Response short-circuits, anything else lets it through.
    """

    def __init__(self, func: Callable[[Request], Any], status: Optional[int] = None):
        self._func = func
        self._status = status

    def pre_request(self, request: Request) -> Optional[Response]:
        result = self._func(request)
        if result is False:
            raise MiddlewareError("Rejected by middleware", status=self._status)
        if isinstance(result, Response):
            return result
        return None

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        return None


class MiddlewareChain:
    """Chain of middleware for sequential execution."""

    def __init__(self, middleware: Optional[List[Middleware]] = None):
        self._middleware = middleware or []

    def add(self, middleware: Middleware) -> "MiddlewareChain":
        """Add middleware to chain."""
        self._middleware.append(middleware)
        return self

    def process_response(self, request: Request, response: Response) -> Response:
        """Process response through all middleware (reverse order)."""
        current_response = response

        for mw in reversed(self._middleware):
            result = mw.post_request(request, current_response)
            if result is not None:
                current_response = result

        return current_response

    def __len__(self) -> int:
        return len(self._middleware)


class MiddlewareRegistry:
    """Name -> middleware lookup used by route declarations.

    Usage:
        registry = MiddlewareRegistry()
        registry.register("auth", AuthMiddleware())
        registry.register("admin", lambda request: request.context.get("admin"))

        router.get("/admin", handler).middleware(["auth", "admin"])
    """

    def __init__(self):
        self._middleware: Dict[str, Middleware] = {}
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        middleware: Union[Middleware, Callable[[Request], Any]],
    ) -> "MiddlewareRegistry":
        """Register middleware under a name."""
        if not isinstance(middleware, Middleware):
            middleware = CallableMiddleware(middleware)
        with self._lock:
            self._middleware[name] = middleware
        return self

    def get(self, name: str) -> Middleware:
        """Look up middleware by name.

        Raises:
            UnknownMiddlewareError: if nothing is registered under ``name``
        """
        with self._lock:
            middleware = self._middleware.get(name)
        if middleware is None:
            raise UnknownMiddlewareError(name)
        return middleware

    def invoke(self, name: str, request: Request) -> Optional[Response]:
        """Run one middleware's ``pre_request``.

        A rejection is re-raised tagged with the middleware name.
        """
        middleware = self.get(name)
        try:
            return middleware.pre_request(request)
        except MiddlewareError as e:
            if not e.middleware:
                e.middleware = name
            logger.warning(f"Middleware {name!r} rejected {request.method} {request.path}: {e.message}")
            raise

    def chain(self, names: Sequence[str]) -> MiddlewareChain:
        """Build the chain for a list of names, in declared order."""
        return MiddlewareChain([self.get(name) for name in names])

    def __contains__(self, name: str) -> bool:
        return name in self._middleware

    def __len__(self) -> int:
        return len(self._middleware)


__all__ = [
    "Middleware",
    "CallableMiddleware",
    "MiddlewareChain",
    "MiddlewareRegistry",
]
