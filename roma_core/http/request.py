"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from roma_core.http.status import DEFAULT_ERROR_STATUS, error_payload, status_message


@dataclass
class Request:
    """HTTP Request object.

    The router only reads ``method`` and ``path``; the rest is available to
    middleware, handlers and the CSRF guard.
    """

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    # Internal
    _context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.method = self.method.upper()

    @property
    def content_type(self) -> str:
        """Get Content-Type header."""
        return self.get_header("Content-Type")

    @property
    def is_json(self) -> bool:
        """Check if request is JSON."""
        return "application/json" in self.content_type

    @property
    def context(self) -> Dict[str, Any]:
        """Per-request scratch space shared by middleware."""
        return self._context

    def json(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body.decode())

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def form(self) -> Dict[str, str]:
        """Parse an url-encoded form body."""
        if "application/x-www-form-urlencoded" not in self.content_type:
            return {}
        return dict(parse_qsl(self.text(), keep_blank_values=True))

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    @classmethod
    def from_raw(cls, data: bytes) -> "Request":
        """Parse request from raw HTTP data."""
        head, _, body = data.partition(b"\r\n\r\n")
        lines = head.split(b"\r\n")

        # Parse request line
        parts = lines[0].decode().split(" ")
        method = parts[0]
        path = parts[1] if len(parts) > 1 else "/"
        protocol = parts[2] if len(parts) > 2 else "HTTP/1.1"

        query = {}
        if "?" in path:
            path, query_string = path.split("?", 1)
            query = dict(parse_qsl(query_string, keep_blank_values=True))

        headers = {}
        for line in lines[1:]:
            if b":" in line:
                key, value = line.decode().split(":", 1)
                headers[key.strip()] = value.strip()

        return cls(
            method=method,
            path=path,
            headers=headers,
            query=query,
            body=body,
            protocol=protocol,
        )


@dataclass
class Response:
    """HTTP Response object."""

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def status_message(self) -> str:
        """Get status message."""
        return status_message(self.status) or "Unknown"

    @property
    def is_success(self) -> bool:
        """Check if response is successful (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_error(self) -> bool:
        """Check if response is error (4xx or 5xx)."""
        return self.status >= 400

    def json_body(self) -> Any:
        """Decode a JSON body."""
        return json.loads(self.body.decode())

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def to_bytes(self) -> bytes:
        """Convert to raw HTTP response."""
        lines = [f"HTTP/1.1 {self.status} {self.status_message}"]

        if "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(self.body))

        for key, value in self.headers.items():
            lines.append(f"{key}: {value}")

        lines.append("")
        header_bytes = "\r\n".join(lines).encode()

        return header_bytes + b"\r\n" + self.body

    @classmethod
    def json(
        cls,
        data: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create JSON response."""
        body = json.dumps(data).encode()
        resp_headers = headers or {}
        resp_headers["Content-Type"] = "application/json"
        return cls(status=status, body=body, headers=resp_headers)

    @classmethod
    def text(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create text response."""
        resp_headers = headers or {}
        resp_headers["Content-Type"] = "text/html; charset=utf-8"
        return cls(status=status, body=text.encode(), headers=resp_headers)

    @classmethod
    def error(cls, status: int = DEFAULT_ERROR_STATUS) -> "Response":
        """Create the JSON error response for a status code.

        Unknown codes never get a made-up message; they are answered as
        Not Found instead.
        """
        if status_message(status) is None:
            status = DEFAULT_ERROR_STATUS
        status = int(status)
        return cls.json(error_payload(status), status=status)

    @classmethod
    def from_result(cls, result: Any) -> "Response":
        """Wrap a handler's return value as the response body."""
        if isinstance(result, Response):
            return result
        if result is None:
            return cls(status=200)
        if isinstance(result, bytes):
            return cls(status=200, body=result)
        if isinstance(result, str):
            return cls.text(result)
        return cls.json(result)


__all__ = [
    "Request",
    "Response",
]
