"""Domain models for the subscription registry."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class Subscription(BaseModel):
    """One live registration of a handler against a named event on a source.

    ``handler`` is what the caller passed in and is used for matching;
    ``bound_handler`` is what the source actually received.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: Any
    handle: Any
    handler: Callable[..., Any]
    bound_handler: Callable[..., Any]

    def matches(
        self,
        source: object | None = None,
        handler: Callable[..., Any] | None = None,
    ) -> bool:
        """Return True if this entry satisfies every supplied filter.

        A ``None`` filter matches anything. Sources compare by identity.
        Handlers deliberately compare by equality rather than identity:
        ``obj.method`` builds a new bound-method object on every access, and
        equality treats two of them for the same object and function as one
        handler. The catch is that a callable object with a custom
        ``__eq__`` decides for itself what it matches.
        """
        if source is not None and self.source is not source:
            return False
        if handler is not None and self.handler != handler:
            return False
        return True
