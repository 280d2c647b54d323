"""Errors raised by the subscription registry."""

from __future__ import annotations


class SubscriptionError(Exception):
    """Base class for errors raised by the registry itself."""


class InvalidNameError(SubscriptionError, ValueError):
    """Raised when a subscription name is empty or not a string."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Subscription name must be a non-empty string, got {name!r}")
        self.name = name


class SourceCapabilityError(SubscriptionError, TypeError):
    """Raised when a source cannot subscribe/unsubscribe handlers."""

    def __init__(self, source: object, missing: list[str]) -> None:
        super().__init__(
            f"{type(source).__name__} is not an event source "
            f"(missing callable: {', '.join(missing)})"
        )
        self.source = source
        self.missing = missing


class InvalidHandlerError(SubscriptionError, TypeError):
    """Raised when a handler, or what the binder made of it, is not callable."""

    def __init__(self, handler: object) -> None:
        super().__init__(f"Handler must be callable, got {handler!r}")
        self.handler = handler
