"""CSRF - Signed token verification for unsafe methods.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from roma_core.errors import AuthError
from roma_core.http.request import Request

logger = logging.getLogger(__name__)


@dataclass
class CsrfConfig:
    """CSRF verification configuration."""

    secret_key: str = ""
    header_name: str = "X-CSRF-Token"
    field_name: str = "_csrf_token"
    token_lifetime: int = 3600
    safe_methods: Tuple[str, ...] = ("GET", "HEAD", "OPTIONS", "TRACE")
    failure_status: int = 403


class CsrfGuard:
    """CSRF token issuer and verifier.

    Tokens have the form ``<timestamp>.<nonce>.<session>.<signature>`` where
    the signature is an HMAC-SHA256 of the rest. Safe methods are never
    checked; unsafe methods must carry a valid token in the configured header
    or form field.

    Usage:
        guard = CsrfGuard(CsrfConfig(secret_key="..."))
        token = guard.generate_token(session_id)

        guard.verify(request)  # raises AuthError on failure
    """

    def __init__(self, config: Optional[CsrfConfig] = None):
        self.config = config or CsrfConfig()
        if not self.config.secret_key:
            logger.warning("No CSRF secret configured, using a random per-process key")
            self.config.secret_key = secrets.token_hex(32)

    def generate_token(self, session_id: str = "") -> str:
        """Generate a signed token, optionally bound to a session."""
        payload = f"{int(time.time())}.{secrets.token_hex(16)}.{session_id}"
        return f"{payload}.{self._sign(payload)}"

    def validate_token(self, token: str, session_id: str = "") -> bool:
        """Check signature, session binding and age of a token."""
        if not token:
            return False

        payload, _, signature = token.rpartition(".")
        if not payload or not hmac.compare_digest(signature, self._sign(payload)):
            return False

        parts = payload.split(".")
        if len(parts) != 3:
            return False

        timestamp, _, token_session = parts
        if session_id and not hmac.compare_digest(token_session, session_id):
            return False

        try:
            issued_at = int(timestamp)
        except ValueError:
            return False

        return time.time() - issued_at <= self.config.token_lifetime

    def get_token(self, request: Request) -> Optional[str]:
        """Extract the token from header, then form body, then query."""
        token = request.get_header(self.config.header_name)
        if token:
            return token

        token = request.form().get(self.config.field_name)
        if token:
            return token

        return request.query.get(self.config.field_name)

    def verify(self, request: Request) -> None:
        """Verify the request's token.

        No-op for safe methods.

        Raises:
            AuthError: if an unsafe request carries no valid token
        """
        if request.method in self.config.safe_methods:
            return

        session_id = request.context.get("session_id", "")
        if not self.validate_token(self.get_token(request) or "", session_id):
            logger.warning(f"CSRF verification failed for {request.method} {request.path}")
            raise AuthError("CSRF token validation failed", status=self.config.failure_status)

    def _sign(self, payload: str) -> str:
        """Sign payload with HMAC-SHA256."""
        key = self.config.secret_key.encode()
        return hmac.new(key, payload.encode(), hashlib.sha256).hexdigest()


__all__ = [
    "CsrfConfig",
    "CsrfGuard",
]
