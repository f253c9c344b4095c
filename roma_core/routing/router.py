"""Router - Route declaration and dispatch engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union

from roma_core.errors import MiddlewareError
from roma_core.http.request import Request, Response
from roma_core.middleware.base import MiddlewareRegistry
from roma_core.routing.handlers import HandlerRegistry, HandlerSpec
from roma_core.routing.matcher import PathMatcher
from roma_core.security.csrf import CsrfGuard
from roma_core.utils.config import RouterConfig

logger = logging.getLogger(__name__)


class Method(str, Enum):
    """HTTP methods a route can be declared for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: Union[str, "Method"]) -> Optional["Method"]:
        """Return the member for a method name, or None if unsupported."""
        try:
            return cls(str(value.value if isinstance(value, Method) else value).upper())
        except ValueError:
            return None


@dataclass
class GroupScope:
    """Prefix and middleware applied to routes declared inside a group."""

    prefix: Optional[str] = None
    middleware: Optional[List[str]] = None


@dataclass
class RouteDeclaration:
    """A declared route, returned so middleware can be chained onto it."""

    method: Optional[Method]
    pattern: str
    handler: Callable[..., Any]
    group: Optional[GroupScope] = None
    _router: Optional["Router"] = field(default=None, repr=False, compare=False)

    def middleware(self, names: Sequence[str]) -> "RouteDeclaration":
        """Attach middleware if this declaration is the current match."""
        if self._router is not None and self._router.state.declaration is self:
            self._router.middleware(names)
        return self


@dataclass
class RouteState:
    """The current match of a dispatch cycle.

    Holds at most one bound handler. Each later declaration that matches
    replaces it, together with its middleware; nothing is merged.
    """

    handler: Optional[Callable[[], Any]] = None
    middleware: Optional[List[str]] = None
    params: Dict[str, str] = field(default_factory=dict)
    declaration: Optional[RouteDeclaration] = None

    @property
    def bound(self) -> bool:
        return self.handler is not None

    def bind(
        self,
        declaration: RouteDeclaration,
        arguments: Sequence[str],
        params: Dict[str, str],
    ) -> None:
        self.handler = functools.partial(declaration.handler, *arguments)
        self.middleware = None
        self.params = dict(params)
        self.declaration = declaration

    def reset(self) -> None:
        self.handler = None
        self.middleware = None
        self.params = {}
        self.declaration = None


class Router:
    """Request Router.

    One Router handles one request: routes are declared against it in
    order, every declaration that matches the live request overwrites the
    current match, and ``dispatch()`` runs the last one. Build a new Router
    per request; the instance state is not meant to be shared between
    concurrent requests.

    Features:
    - Captures (/users/{id}) passed to handlers as positional arguments
    - Groups with a shared prefix and middleware
    - Named middleware run before the handler
    - CSRF verification for unsafe methods
    - Numeric paths (/404) answered with that status' error body

    Usage:
        router = Router(request)

        router.get("/", home)
        router.get("/users/{id}", show_user).middleware(["auth"])
        router.group({"prefix": "/api", "middleware": ["auth"]}, lambda group: (
            router.get("/users/{id}", "users:show"),
        ))

        response = router.dispatch()
    """

    def __init__(
        self,
        request: Request,
        handlers: Optional[HandlerRegistry] = None,
        middleware: Optional[MiddlewareRegistry] = None,
        csrf: Optional[CsrfGuard] = None,
        config: Optional[RouterConfig] = None,
        matcher: Optional[PathMatcher] = None,
    ):
        self.request = request
        self.config = config or RouterConfig()
        self.handlers = handlers or HandlerRegistry()
        self.middleware_registry = middleware or MiddlewareRegistry()
        self.csrf = csrf
        self.controller: Optional[str] = self.config.controller_namespace or None
        self.state = RouteState()

        self._matcher = matcher or PathMatcher()
        self._groups: List[GroupScope] = []
        self._status: Optional[int] = None
        self._methods = {
            m for m in (Method.parse(name) for name in self.config.supported_methods) if m
        }

    @property
    def current_group(self) -> Optional[GroupScope]:
        """The innermost active group, if any."""
        return self._groups[-1] if self._groups else None

    def route(
        self,
        method: Union[str, Method],
        pattern: str,
        handler: HandlerSpec,
    ) -> RouteDeclaration:
        """Declare a route.

        Args:
            method: HTTP method
            pattern: URL pattern, ``{name}`` segments capture
            handler: Callable or ``"controller:method"`` string

        Handler strings are resolved here, before the method and path are
        checked, so an unregistered key fails the whole request with a 500
        even when this route would not have matched.

        Raises:
            UnregisteredHandlerError: if a handler string does not resolve
            AuthError: if CSRF verification fails
        """
        group = self.current_group
        declaration = RouteDeclaration(
            method=Method.parse(method),
            pattern=pattern,
            handler=self.handlers.resolve(handler, namespace=self.controller),
            group=group,
            _router=self,
        )

        if not self._accepts(declaration.method):
            return declaration

        if self.csrf is not None:
            self.csrf.verify(self.request)

        result = self._matcher.match(
            pattern,
            self.request.path,
            prefix=group.prefix if group else None,
        )

        if result.status is not None:
            self._status = result.status
            return declaration

        if not result:
            return declaration

        self.state.bind(declaration, result.arguments, result.params)
        if group and group.middleware:
            self.state.middleware = list(group.middleware)

        logger.debug(
            f"Matched {self.request.method} {self.request.path} -> "
            f"{(group.prefix or '') if group else ''}{pattern} args={result.arguments}"
        )
        return declaration

    def get(self, pattern: str, handler: HandlerSpec) -> RouteDeclaration:
        """Add GET route."""
        return self.route(Method.GET, pattern, handler)

    def post(self, pattern: str, handler: HandlerSpec) -> RouteDeclaration:
        """Add POST route."""
        return self.route(Method.POST, pattern, handler)

    def put(self, pattern: str, handler: HandlerSpec) -> RouteDeclaration:
        """Add PUT route."""
        return self.route(Method.PUT, pattern, handler)

    def patch(self, pattern: str, handler: HandlerSpec) -> RouteDeclaration:
        """Add PATCH route."""
        return self.route(Method.PATCH, pattern, handler)

    def delete(self, pattern: str, handler: HandlerSpec) -> RouteDeclaration:
        """Add DELETE route."""
        return self.route(Method.DELETE, pattern, handler)

    def group(
        self,
        config: Dict[str, Any],
        callback: Callable[[GroupScope], Any],
    ) -> Any:
        """Declare routes under a shared prefix and/or middleware.

        Args:
            config: Optional ``prefix`` and ``middleware`` keys
            callback: Called with the active ``GroupScope``, not the bare
                prefix string; read ``group.prefix`` for the prefix. Routes
                it declares belong to the group

        Returns:
            Whatever the callback returns
        """
        with self.scope(config.get("prefix"), config.get("middleware")) as group:
            return callback(group)

    @contextmanager
    def scope(
        self,
        prefix: Optional[str] = None,
        middleware: Optional[Sequence[str]] = None,
    ) -> Iterator[GroupScope]:
        """Context manager form of ``group``.

        A nested scope's prefix replaces the enclosing one; a key it leaves
        out keeps the enclosing value. The scope is released on exit, so
        routes declared afterwards are ungrouped.
        """
        parent = self.current_group
        inherited_prefix = parent.prefix if parent else None
        inherited_middleware = parent.middleware if parent else None

        group = GroupScope(
            prefix=prefix if prefix is not None else inherited_prefix,
            middleware=list(middleware) if middleware else inherited_middleware,
        )
        logger.debug(f"Entering group prefix={group.prefix!r} middleware={group.middleware}")

        self._groups.append(group)
        try:
            yield group
        finally:
            self._groups.pop()

    def middleware(self, names: Sequence[str]) -> "Router":
        """Attach middleware to the current match.

        Only the first attachment for a match counts; without a match this
        is a no-op.
        """
        if self.state.bound and not self.state.middleware:
            self.state.middleware = list(names)
        return self

    def dispatch(self) -> Response:
        """Run the current match and produce the response.

        Raises:
            UnknownMiddlewareError: if an attached name is not registered
        """
        if self._status is not None:
            return self.on_http_error(self._status)

        if not self.state.bound:
            return self.on_http_error(404)

        self._groups.clear()
        names = self.state.middleware or []

        try:
            for name in names:
                short_circuit = self.middleware_registry.invoke(name, self.request)
                if short_circuit is not None:
                    return short_circuit
        except MiddlewareError as e:
            return self.on_http_error(e.status)

        response = Response.from_result(self.state.handler())
        if names:
            chain = self.middleware_registry.chain(names)
            response = chain.process_response(self.request, response)
        return response

    def on_http_error(self, code: int = 404) -> Response:
        """Build the JSON error response for a status code."""
        return Response.error(code)

    def reset(self) -> "Router":
        """Forget the current match to start a new cycle on this instance."""
        self.state.reset()
        self._groups.clear()
        self._status = None
        return self

    def _accepts(self, method: Optional[Method]) -> bool:
        """Check the declared method against the live request's."""
        request_method = Method.parse(self.request.method)
        return (
            method is not None
            and method in self._methods
            and request_method in self._methods
            and method == request_method
        )


__all__ = [
    "Router",
    "Method",
    "GroupScope",
    "RouteDeclaration",
    "RouteState",
]
