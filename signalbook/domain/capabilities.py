"""Capabilities the registry consumes: event sources and handler binding."""

from __future__ import annotations

import inspect
import types
from typing import Any, Callable, Protocol, runtime_checkable

from signalbook.domain.errors import SourceCapabilityError

Binder = Callable[[object, Callable[..., Any]], Callable[..., Any]]


@runtime_checkable
class EventSource(Protocol):
    """Anything that can subscribe a handler by name and unsubscribe it by handle."""

    def subscribe(self, name: str, handler: Callable[..., Any]) -> Any: ...

    def unsubscribe(self, handle: Any) -> None: ...


def bind_to_owner(owner: object, handler: Callable[..., Any]) -> Callable[..., Any]:
    """Default binder: make *owner* the receiver of *handler*.

    Plain functions are bound with ``types.MethodType`` so they are called as
    ``handler(owner, *args)``. Bound methods already carry a receiver, and
    other callables (partials, callable objects, builtins) are returned as-is.
    """
    if inspect.isfunction(handler):
        return types.MethodType(handler, owner)
    return handler


def require_event_source(source: object) -> EventSource:
    """Return *source* unchanged, or raise if it lacks the source shape."""
    missing = [
        attr
        for attr in ("subscribe", "unsubscribe")
        if not callable(getattr(source, attr, None))
    ]
    if missing:
        raise SourceCapabilityError(source, missing)
    return source  # type: ignore[return-value]
