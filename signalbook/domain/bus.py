"""Simple synchronous in-process signal source."""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import Any, Callable


class SignalBus:
    """Named-signal source that hands out integer handles.

    Handlers are called synchronously in registration order.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, dict[int, Callable]] = defaultdict(dict)
        self._names: dict[int, str] = {}
        self._ids = itertools.count(1)
        self._destroyed = False

    def subscribe(self, name: str, handler: Callable) -> int:
        self._check_alive()
        handle = next(self._ids)
        self._handlers[name][handle] = handler
        self._names[handle] = name
        return handle

    def unsubscribe(self, handle: int) -> None:
        self._check_alive()
        try:
            name = self._names.pop(handle)
        except KeyError:
            raise KeyError(f"No handler connected with handle {handle!r}") from None
        handlers = self._handlers[name]
        del handlers[handle]
        if not handlers:
            del self._handlers[name]

    def emit(self, name: str, *args: Any) -> None:
        for handler in list(self._handlers.get(name, {}).values()):
            handler(*args)

    def handler_count(self, name: str | None = None) -> int:
        if name is not None:
            return len(self._handlers.get(name, {}))
        return len(self._names)

    def destroy(self) -> None:
        """Drop every handler; later subscribe/unsubscribe calls fail."""
        self._handlers.clear()
        self._names.clear()
        self._destroyed = True

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("SignalBus has been destroyed")
