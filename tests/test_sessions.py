"""Tests for the per-session cart registry"""
from unittest.mock import Mock

import pytest

from safeer.cart import CartSessionRegistry, CartStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock, scheduler):
    return CartSessionRegistry(
        store_factory=lambda: CartStore(scheduler=scheduler),
        ttl_seconds=60,
        clock=clock,
    )


def test_start_creates_empty_cart(registry):
    session_id, store = registry.start()

    assert session_id
    assert store.items == ()
    assert registry.get(session_id) is store
    assert len(registry) == 1


def test_sessions_are_isolated(registry):
    first_id, first = registry.start()
    second_id, second = registry.start()

    first.add_item(title="Boss", price="800")

    assert first_id != second_id
    assert second.items == ()


def test_get_unknown_session(registry):
    assert registry.get("nope") is None
    assert registry.get(None) is None


def test_get_or_start_reuses_existing(registry):
    session_id, store = registry.start()
    assert registry.get_or_start(session_id) == (session_id, store)


def test_get_or_start_unknown_starts_new(registry):
    session_id, store = registry.get_or_start("stale-cookie")
    assert session_id != "stale-cookie"
    assert registry.get(session_id) is store


def test_end_discards_and_closes_store(scheduler):
    store = Mock(spec=CartStore)
    registry = CartSessionRegistry(store_factory=lambda: store)
    session_id, _ = registry.start()

    assert registry.end(session_id) is True
    store.close.assert_called_once()
    assert registry.get(session_id) is None
    assert registry.end(session_id) is False


def test_idle_sessions_expire(registry, clock, scheduler):
    session_id, store = registry.start()
    store.add_item(title="Boss", price="800")

    clock.now += 61

    assert registry.get(session_id) is None
    assert len(registry) == 0
    # Pending auto-hide timer released with the store
    assert scheduler.pending == []


def test_access_refreshes_idle_timer(registry, clock):
    session_id, store = registry.start()

    clock.now += 50
    assert registry.get(session_id) is store
    clock.now += 50
    assert registry.get(session_id) is store


def test_lookup_expires_its_own_entry_between_sweeps(clock, scheduler):
    registry = CartSessionRegistry(
        store_factory=lambda: CartStore(scheduler=scheduler),
        ttl_seconds=60,
        clock=clock,
        sweep_interval=3600,
    )
    session_id, _ = registry.start()

    clock.now += 61

    assert registry.get(session_id) is None
    assert len(registry) == 0


def test_full_sweep_is_throttled(clock, scheduler):
    registry = CartSessionRegistry(
        store_factory=lambda: CartStore(scheduler=scheduler),
        ttl_seconds=60,
        clock=clock,
        sweep_interval=600,
    )
    registry.start()
    registry.start()

    clock.now += 61
    registry.start()
    # Idle sessions linger until the next sweep is due
    assert len(registry) == 3

    clock.now += 600
    registry.start()
    assert len(registry) == 1
