"""Route Matcher - Segment-wise path matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from roma_core.http.status import status_message


@dataclass
class MatchResult:
    """Outcome of comparing one route pattern with the request path.

    ``status`` is set instead of ``arguments`` when the request path itself
    names a known HTTP status code (``/404``).
    """

    matched: bool
    arguments: List[str] = field(default_factory=list)
    params: Dict[str, str] = field(default_factory=dict)
    status: Optional[int] = None

    def __bool__(self) -> bool:
        return self.matched


def canonicalize_path(path: str) -> str:
    """Drop the query string and a single trailing slash (root stays ``/``)."""
    path = path.split("?", 1)[0]
    if path != "/" and path.endswith("/"):
        path = path[:-1]
    return path


def split_segments(path: str) -> List[str]:
    """Split a path on ``/``, discarding the empty leading segment."""
    if path in ("", "/"):
        return []
    return path.split("/")[1:]


def is_capture(segment: str) -> bool:
    """Check if a pattern segment is written as ``{name}``."""
    return len(segment) >= 2 and segment.startswith("{") and segment.endswith("}")


def status_code_of(path: str) -> Optional[int]:
    """Return the code when the path is purely numeric (``/404``)."""
    digits = path.lstrip("/")
    if digits.isascii() and digits.isdigit():
        return int(digits)
    return None


class PathMatcher:
    """URL path pattern matcher.

    Supports:
    - Exact matches: /users
    - Captures: /users/{id}
    - The literal root route: /

    Patterns are compared segment by segment; a capture accepts any single
    request segment and its value becomes a handler argument. Matching is
    all-or-nothing: the first literal mismatch discards any captures.
    """

    def __init__(self, status_lookup: Callable[[int], Optional[str]] = status_message):
        self._status_lookup = status_lookup
        self._cache: Dict[str, Tuple[List[str], bool]] = {}

    def match(
        self,
        pattern: str,
        path: str,
        prefix: Optional[str] = None,
    ) -> MatchResult:
        """Match a request path against a declared pattern.

        Args:
            pattern: Route pattern, e.g. ``/users/{id}``
            path: Live request path (may carry a query string)
            prefix: Active group prefix, prepended to the pattern

        Returns:
            MatchResult; falsy when the path does not match
        """
        if prefix:
            pattern = prefix + pattern

        path = canonicalize_path(path)

        code = status_code_of(path)
        if code is not None and self._status_lookup(code) is not None:
            return MatchResult(matched=True, status=code)

        pattern_segments, is_root = self._compile(pattern)
        path_segments = split_segments(path)

        if is_root and not path_segments:
            return MatchResult(matched=True)

        if len(pattern_segments) != len(path_segments):
            return MatchResult(matched=False)

        arguments = []
        params = {}
        for expected, actual in zip(pattern_segments, path_segments):
            if is_capture(expected):
                arguments.append(actual)
                params[expected[1:-1]] = actual
            elif expected != actual:
                return MatchResult(matched=False)

        return MatchResult(matched=True, arguments=arguments, params=params)

    def _compile(self, pattern: str) -> Tuple[List[str], bool]:
        """Split a pattern into segments (cached)."""
        if pattern in self._cache:
            return self._cache[pattern]

        trimmed = pattern
        if trimmed != "/" and trimmed.endswith("/"):
            trimmed = trimmed[:-1]
        segments = trimmed.split("/")[1:]
        # "/" splits to [""]: the root route
        is_root = bool(segments) and segments[0] == ""

        self._cache[pattern] = (segments, is_root)
        return segments, is_root


__all__ = [
    "MatchResult",
    "PathMatcher",
    "canonicalize_path",
    "split_segments",
    "is_capture",
    "status_code_of",
]
