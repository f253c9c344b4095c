"""Application - Per-request router construction and error boundary.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from roma_core.errors import RouterError
from roma_core.http.request import Request, Response
from roma_core.middleware.base import Middleware, MiddlewareRegistry
from roma_core.middleware.logging import AccessLogMiddleware
from roma_core.routing.handlers import HandlerRegistry
from roma_core.routing.router import Router
from roma_core.security.csrf import CsrfConfig, CsrfGuard
from roma_core.utils.config import RouterConfig

logger = logging.getLogger(__name__)

RouteTable = Callable[[Router], Any]


class Application:
    """Routes requests through a fresh Router each time.

    The route table is a function that declares routes on the Router it is
    given. Every request gets its own Router, so match state and group
    scopes never leak between requests, and the application itself can be
    shared across threads.

    Usage:
        def routes(router):
            router.get("/", lambda: "home")
            router.get("/users/{id}", "users:show").middleware(["auth"])

        app = Application(routes)
        app.controller("users", UsersController())
        app.use("auth", AuthMiddleware())

        response = app.handle(Request("GET", "/users/42"))
    """

    def __init__(
        self,
        routes: RouteTable,
        config: Optional[RouterConfig] = None,
    ):
        self.config = config or RouterConfig()
        self.routes = routes
        self.handlers = HandlerRegistry()
        self.middleware = MiddlewareRegistry()
        self.csrf: Optional[CsrfGuard] = None
        self.access_log: Optional[Middleware] = None

        if self.config.csrf_enabled:
            self.csrf = CsrfGuard(CsrfConfig(
                secret_key=self.config.csrf_secret,
                header_name=self.config.csrf_header,
                field_name=self.config.csrf_field,
                token_lifetime=self.config.csrf_token_lifetime,
                failure_status=self.config.csrf_failure_status,
            ))
        if self.config.access_log:
            self.access_log = AccessLogMiddleware()

    def controller(self, name: str, controller: Any) -> "Application":
        """Register a controller for ``"name:method"`` handlers."""
        self.handlers.register(name, controller)
        return self

    def use(self, name: str, middleware: Any) -> "Application":
        """Register named middleware."""
        self.middleware.register(name, middleware)
        return self

    def router(self, request: Request) -> Router:
        """Build a Router bound to one request."""
        return Router(
            request,
            handlers=self.handlers,
            middleware=self.middleware,
            csrf=self.csrf,
            config=self.config,
        )

    def handle(self, request: Request) -> Response:
        """Declare the route table for this request and dispatch it."""
        if self.access_log:
            self.access_log.pre_request(request)

        response = self._dispatch(request)

        if self.access_log:
            self.access_log.post_request(request, response)
        return response

    def handle_raw(self, data: bytes) -> bytes:
        """Handle a raw HTTP request and return the raw response."""
        return self.handle(Request.from_raw(data)).to_bytes()

    def _dispatch(self, request: Request) -> Response:
        router = self.router(request)
        try:
            self.routes(router)
            return router.dispatch()
        except RouterError as e:
            logger.warning(f"{request.method} {request.path} failed: {e.message} ({e.status})")
            return router.on_http_error(e.status)
        except Exception:
            logger.exception(f"Unhandled error for {request.method} {request.path}")
            return router.on_http_error(500)


__all__ = [
    "Application",
    "RouteTable",
]
