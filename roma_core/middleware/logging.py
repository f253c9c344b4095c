"""Logging Middleware - Request/response logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import List, Optional

from roma_core.http.request import Request, Response
from roma_core.middleware.base import Middleware

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Logging middleware configuration."""

    log_headers: bool = False
    log_query: bool = True
    skip_paths: Optional[List[str]] = None


class LoggingMiddleware(Middleware):
    """Logs the matched request and the handler's response."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()

    def pre_request(self, request: Request) -> Optional[Response]:
        """Log incoming request."""
        if self.config.skip_paths and request.path in self.config.skip_paths:
            return None

        request_id = str(uuid.uuid4())[:8]
        request.context["request_id"] = request_id
        request.context["start_time"] = time.time()

        log_parts = [f"[{request_id}] --> {request.method} {request.path}"]

        if self.config.log_query and request.query:
            log_parts.append(f"query={request.query}")

        if self.config.log_headers:
            log_parts.append(f"headers={request.headers}")

        logger.info(" ".join(log_parts))
        return None

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Log outgoing response."""
        if "request_id" not in request.context:
            return None

        duration_ms = (time.time() - request.context["start_time"]) * 1000
        logger.info(f"[{request.context['request_id']}] <-- {response.status} ({duration_ms:.2f}ms)")
        return None


class AccessLogMiddleware(Middleware):
    """Apache/Nginx style access logging."""

    def __init__(self, format_string: Optional[str] = None):
        # Combined log format by default
        self.format = format_string or (
            '{remote_addr} - {remote_user} [{time}] '
            '"{method} {path} {protocol}" {status} {body_bytes} '
            '"{referer}" "{user_agent}"'
        )

    def pre_request(self, request: Request) -> Optional[Response]:
        """Record request start time."""
        request.context["access_start"] = time.time()
        return None

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Log in access log format."""
        log_data = {
            "remote_addr": request.remote_addr or "-",
            "remote_user": "-",
            "time": time.strftime("%d/%b/%Y:%H:%M:%S %z"),
            "method": request.method,
            "path": request.path,
            "protocol": request.protocol,
            "status": response.status,
            "body_bytes": len(response.body),
            "referer": request.get_header("Referer", "-"),
            "user_agent": request.get_header("User-Agent", "-"),
        }

        logger.info(self.format.format(**log_data))
        return None


__all__ = [
    "LoggingMiddleware",
    "AccessLogMiddleware",
    "LoggingConfig",
]
