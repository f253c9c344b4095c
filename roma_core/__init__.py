"""Roma - Minimal HTTP request router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Roma maps a request's method and path to a declared handler:
- Segment-wise path matching with ``{name}`` captures
- Route groups with a shared prefix and middleware
- Named middleware run before the handler
- CSRF verification for unsafe methods
- JSON error bodies for unmatched routes and numeric status paths

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                                 Roma                                         │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                          Dispatch Cycle                                │  │
│  │  Request ──▶ Declarations ──▶ Current Match ──▶ Middleware ──▶ Handler │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │   Middleware    │  │        HTTP                 │ │
│  │                 │  │                 │  │                             │ │
│  │ - PathMatcher   │  │ - Registry      │  │ - Request / Response        │ │
│  │ - Router        │  │ - Chain         │  │ - Status table              │ │
│  │ - Groups        │  │ - Logging       │  │ - JSON error bodies         │ │
│  │ - Handlers      │  │                 │  │                             │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Request Flow:
1. Application builds a Router for the request
2. The route table declares routes; each match overwrites the last one
3. dispatch() runs the match's middleware, then its handler
4. No match answers 404; a path like /503 answers that status

Usage:
    from roma_core import Application, Request

    def routes(router):
        router.get("/", lambda: "home")
        router.group({"prefix": "/api", "middleware": ["auth"]}, lambda group: (
            router.get("/users/{id}", "users:show"),
        ))

    app = Application(routes)
    app.controller("users", UsersController())
    app.use("auth", AuthMiddleware())

    response = app.handle(Request("GET", "/api/users/42"))
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Application
from roma_core.app import Application

# HTTP
from roma_core.http.request import Request, Response
from roma_core.http.status import error_payload, status_message

# Routing
from roma_core.routing.router import Router, Method, GroupScope, RouteState
from roma_core.routing.matcher import PathMatcher, MatchResult
from roma_core.routing.handlers import HandlerRegistry

# Middleware
from roma_core.middleware.base import Middleware, MiddlewareRegistry
from roma_core.middleware.logging import LoggingMiddleware

# Security
from roma_core.security.csrf import CsrfGuard, CsrfConfig

# Errors
from roma_core.errors import (
    RouterError,
    AuthError,
    MiddlewareError,
    UnknownMiddlewareError,
    UnregisteredHandlerError,
)

# Utils
from roma_core.utils.config import RouterConfig, load_config
from roma_core.utils.log import configure_logging

__all__ = [
    # Version
    "__version__",
    # Application
    "Application",
    # HTTP
    "Request",
    "Response",
    "error_payload",
    "status_message",
    # Routing
    "Router",
    "Method",
    "GroupScope",
    "RouteState",
    "PathMatcher",
    "MatchResult",
    "HandlerRegistry",
    # Middleware
    "Middleware",
    "MiddlewareRegistry",
    "LoggingMiddleware",
    # Security
    "CsrfGuard",
    "CsrfConfig",
    # Errors
    "RouterError",
    "AuthError",
    "MiddlewareError",
    "UnknownMiddlewareError",
    "UnregisteredHandlerError",
    # Utils
    "RouterConfig",
    "load_config",
    "configure_logging",
]
