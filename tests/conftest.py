"""Shared fixtures: a recording source and a fresh registry per test."""

from __future__ import annotations

import pytest

from signalbook.domain.registry import SubscriptionRegistry


class RecordingSource:
    """Event source that records every subscribe/unsubscribe call."""

    def __init__(self, label: str = "source") -> None:
        self.label = label
        self.subscribed: list[tuple[str, object, int]] = []
        self.unsubscribed: list[int] = []
        self._next = 100

    def subscribe(self, name, handler):
        self._next += 1
        self.subscribed.append((name, handler, self._next))
        return self._next

    def unsubscribe(self, handle):
        self.unsubscribed.append(handle)

    def __repr__(self) -> str:
        return f"<RecordingSource {self.label}>"


class Owner:
    pass


@pytest.fixture()
def owner():
    return Owner()


@pytest.fixture()
def registry(owner):
    return SubscriptionRegistry(owner)


@pytest.fixture()
def make_source():
    def _make(label: str = "source") -> RecordingSource:
        return RecordingSource(label)

    return _make
