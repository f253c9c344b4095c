"""Routing module - Route matching and dispatch."""

from roma_core.routing.handlers import HandlerRegistry
from roma_core.routing.matcher import MatchResult, PathMatcher, canonicalize_path
from roma_core.routing.router import (
    GroupScope,
    Method,
    RouteDeclaration,
    Router,
    RouteState,
)

__all__ = [
    "Router",
    "Method",
    "GroupScope",
    "RouteDeclaration",
    "RouteState",
    "PathMatcher",
    "MatchResult",
    "canonicalize_path",
    "HandlerRegistry",
]
