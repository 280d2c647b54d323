"""Base class for objects that own their subscriptions."""

from __future__ import annotations

from signalbook.domain.registry import SubscriptionRegistry


class SubscriptionOwner:
    """Owns a :class:`SubscriptionRegistry` bound to ``self``.

    Subclasses subscribe through ``self.subscriptions`` and call
    :meth:`destroy` when they are torn down.
    """

    def __init__(self) -> None:
        self.subscriptions = SubscriptionRegistry(self)
        self.destroyed = False

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.destroyed = True
        self.subscriptions.clear()
