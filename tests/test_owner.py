"""End-to-end tests: owners subscribing to a real bus and tearing down."""

from __future__ import annotations

import functools

import pytest

from signalbook.domain.bus import SignalBus
from signalbook.domain.capabilities import bind_to_owner
from signalbook.domain.owner import SubscriptionOwner
from signalbook.domain.registry import SubscriptionRegistry


class Panel(SubscriptionOwner):
    def __init__(self, settings: SignalBus, screen: SignalBus) -> None:
        super().__init__()
        self.seen: list[tuple[str, object]] = []
        self.subscriptions.subscribe(settings, "changed::foo", Panel._on_foo)
        self.subscriptions.subscribe(screen, "resized", self._on_resized)

    def _on_foo(self, value):
        self.seen.append(("foo", value))

    def _on_resized(self, width, height):
        self.seen.append(("resized", (width, height)))


@pytest.fixture()
def env():
    class Env:
        pass

    e = Env()
    e.settings = SignalBus()
    e.screen = SignalBus()
    e.panel = Panel(e.settings, e.screen)
    return e


def test_plain_function_handler_receives_owner(env):
    env.settings.emit("changed::foo", 3)

    assert env.panel.seen == [("foo", 3)]


def test_bound_method_handler_is_used_as_is(env):
    env.screen.emit("resized", 800, 600)

    assert env.panel.seen == [("resized", (800, 600))]


def test_bound_method_resubscribe_is_not_a_duplicate(env):
    env.panel.subscriptions.subscribe(env.screen, "resized", env.panel._on_resized)

    assert env.screen.handler_count("resized") == 1
    assert env.panel.subscriptions.is_subscribed(
        "resized", env.screen, env.panel._on_resized
    )


def test_unsubscribe_stops_delivery(env):
    env.panel.subscriptions.unsubscribe("changed::foo")
    env.settings.emit("changed::foo", 1)

    assert env.panel.seen == []
    assert env.settings.handler_count() == 0
    assert env.screen.handler_count() == 1


def test_destroy_releases_everything(env):
    env.panel.destroy()

    assert env.settings.handler_count() == 0
    assert env.screen.handler_count() == 0
    assert len(env.panel.subscriptions) == 0

    env.settings.emit("changed::foo", 1)
    assert env.panel.seen == []


def test_destroy_twice_is_harmless(env):
    env.panel.destroy()
    env.panel.destroy()

    assert env.panel.destroyed is True


def test_each_owner_has_its_own_registry():
    settings, screen = SignalBus(), SignalBus()
    a = Panel(settings, screen)
    b = Panel(settings, screen)

    a.destroy()
    settings.emit("changed::foo", "x")

    assert a.seen == []
    assert b.seen == [("foo", "x")]
    assert settings.handler_count("changed::foo") == 1


def test_custom_binder_is_applied():
    bound_calls: list[tuple[object, str, int]] = []

    def binder(owner, handler):
        return functools.partial(handler, owner, "extra")

    def handler(owner, tag, value):
        bound_calls.append((owner, tag, value))

    owner = object()
    bus = SignalBus()
    registry = SubscriptionRegistry(owner, binder=binder)
    registry.subscribe(bus, "evt", handler)

    bus.emit("evt", 5)

    assert bound_calls == [(owner, "extra", 5)]
    assert registry.is_subscribed("evt", bus, handler)


def test_default_binder_leaves_non_functions_alone():
    owner = object()
    partial = functools.partial(print, "x")

    assert bind_to_owner(owner, partial) is partial
    assert bind_to_owner(owner, print) is print
