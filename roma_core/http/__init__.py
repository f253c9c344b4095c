"""HTTP module - Request/response objects and status table."""

from roma_core.http.request import Request, Response
from roma_core.http.status import (
    STATUS_MESSAGES,
    error_payload,
    status_message,
)

__all__ = [
    "Request",
    "Response",
    "STATUS_MESSAGES",
    "error_payload",
    "status_message",
]
