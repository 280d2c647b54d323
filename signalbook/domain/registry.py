"""Owner-scoped registry of event subscriptions."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable

from signalbook.domain.capabilities import Binder, bind_to_owner, require_event_source
from signalbook.domain.errors import InvalidHandlerError, InvalidNameError
from signalbook.domain.models import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """Tracks the subscriptions one owner makes against any number of sources.

    Every handler is bound to ``owner`` before it is handed to the source, so

        registry.subscribe(settings, "changed::foo", Panel._on_foo)

    replaces ``settings.subscribe("changed::foo", panel._on_foo)`` plus the
    bookkeeping needed to undo it later. Entries can then be removed by name,
    optionally narrowed by source and/or handler, or all at once with
    :meth:`clear` from the owner's teardown path.

    Names with no remaining subscriptions are dropped from the mapping.
    """

    def __init__(self, owner: object, binder: Binder = bind_to_owner) -> None:
        self.owner = owner
        self._binder = binder
        self._lock = threading.RLock()
        self._storage: dict[str, list[Subscription]] = {}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def subscribe(
        self,
        source: object,
        name: str,
        handler: Callable[..., Any],
        force: bool = False,
    ) -> None:
        """Subscribe *handler* to *name* on *source*, bound to the owner.

        Does nothing if the same (name, source, handler) is already
        subscribed, unless *force* is true. Note that the source comes first
        here, while every other method takes the name first.
        """
        if not isinstance(name, str) or not name:
            raise InvalidNameError(name)
        require_event_source(source)
        if not callable(handler):
            raise InvalidHandlerError(handler)

        with self._lock:
            if not force and self.is_subscribed(name, source, handler):
                logger.debug("Skipping duplicate subscription to %r on %r", name, source)
                return

            bound = self._binder(self.owner, handler)
            if not callable(bound):
                raise InvalidHandlerError(bound)
            handle = source.subscribe(name, bound)  # type: ignore[attr-defined]
            try:
                entry = Subscription(
                    source=source,
                    handle=handle,
                    handler=handler,
                    bound_handler=bound,
                )
            except Exception:
                # Nothing will ever reference the handle, so give it back.
                source.unsubscribe(handle)  # type: ignore[attr-defined]
                raise
            self._storage.setdefault(name, []).append(entry)
            logger.debug("Subscribed to %r on %r (handle=%r)", name, source, handle)

    def is_subscribed(
        self,
        name: str,
        source: object | None = None,
        handler: Callable[..., Any] | None = None,
    ) -> bool:
        """Return whether anything matching the filters is subscribed to *name*.

        *source* and *handler* are optional; leave them out to match any.
        Pass *source* along with *handler* when the same handler may be
        subscribed on several sources.
        """
        with self._lock:
            return any(s.matches(source, handler) for s in self._storage.get(name, ()))

    def unsubscribe(
        self,
        name: str,
        source: object | None = None,
        handler: Callable[..., Any] | None = None,
    ) -> None:
        """Unsubscribe everything subscribed to *name* that matches the filters.

        Safe to call when nothing matches.
        """
        with self._lock:
            entries = self._storage.get(name)
            if not entries:
                return

            matched = [s for s in entries if s.matches(source, handler)]
            if not matched:
                return

            remaining = [s for s in entries if not s.matches(source, handler)]
            if remaining:
                self._storage[name] = remaining
            else:
                del self._storage[name]

            logger.debug("Unsubscribing %d handler(s) from %r", len(matched), name)
            _release(matched)

    def clear(self) -> None:
        """Unsubscribe every subscription held by this registry."""
        with self._lock:
            if not self._storage:
                return
            storage, self._storage = self._storage, {}
            entries = [s for subs in storage.values() for s in subs]
            logger.debug(
                "Clearing %d subscription(s) across %d name(s)", len(entries), len(storage)
            )
            _release(entries)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._storage)

    def subscriptions(self, name: str | None = None) -> tuple[Subscription, ...]:
        """Return the live entries for *name*, or for every name if omitted."""
        with self._lock:
            if name is not None:
                return tuple(self._storage.get(name, ()))
            return tuple(s for subs in self._storage.values() for s in subs)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(subs) for subs in self._storage.values())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._storage

    def __enter__(self) -> SubscriptionRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} owner={self.owner!r} subscriptions={len(self)}>"


def _release(entries: Iterable[Subscription]) -> None:
    """Hand each entry's handle back to its source.

    Every entry is attempted; the first failure is re-raised afterwards.
    """
    first_error: BaseException | None = None
    for entry in entries:
        try:
            entry.source.unsubscribe(entry.handle)
        except Exception as exc:
            logger.exception(
                "Failed to unsubscribe handle %r from %r", entry.handle, entry.source
            )
            if first_error is None:
                first_error = exc
    if first_error is not None:
        raise first_error
