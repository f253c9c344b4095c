"""Handler Registry - Resolve ``"controller:method"`` handler strings.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional, Union

from roma_core.errors import UnregisteredHandlerError

logger = logging.getLogger(__name__)

HandlerSpec = Union[str, Callable[..., Any]]


class HandlerRegistry:
    """Registry of controller instances addressed by name.

    Controllers are registered up front; route declarations then refer to
    their methods as ``"users:show"``. A namespace qualifies the controller
    name (``"admin.users"``), so one registry can serve several areas.

    Usage:
        registry = HandlerRegistry()
        registry.register("users", UsersController())

        handler = registry.resolve("users:show")
    """

    SEPARATOR = ":"

    def __init__(self):
        self._controllers: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(self, name: str, controller: Any) -> "HandlerRegistry":
        """Register a controller instance under a name."""
        with self._lock:
            self._controllers[name.lower()] = controller
        return self

    def unregister(self, name: str) -> bool:
        """Remove a controller."""
        with self._lock:
            return self._controllers.pop(name.lower(), None) is not None

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._controllers

    def resolve(
        self,
        handler: HandlerSpec,
        namespace: Optional[str] = None,
    ) -> Callable[..., Any]:
        """Turn a handler declaration into a callable.

        Callables pass through unchanged. Strings must have the form
        ``"controller:method"`` and name a registered controller that has
        a callable attribute of that name.

        Raises:
            UnregisteredHandlerError: if the string does not resolve
        """
        if callable(handler):
            return handler

        if not isinstance(handler, str) or handler.count(self.SEPARATOR) != 1:
            raise UnregisteredHandlerError(str(handler))

        name, method_name = handler.split(self.SEPARATOR)
        if namespace:
            name = f"{namespace}.{name}"

        with self._lock:
            controller = self._controllers.get(name.lower())

        method = getattr(controller, method_name, None) if controller is not None else None
        if not callable(method):
            logger.debug(f"Handler {handler!r} not found (namespace={namespace!r})")
            raise UnregisteredHandlerError(handler)

        return method


__all__ = [
    "HandlerRegistry",
    "HandlerSpec",
]
