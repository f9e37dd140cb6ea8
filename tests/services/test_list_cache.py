"""Unit tests for InMemoryListCache and its invalidation policies."""

from dataclasses import dataclass

import pytest

from wordbook_manager.services.caching import InMemoryListCache, NeverExpire, TimeToLive


@dataclass(frozen=True)
class Item:
    id: str
    label: str = ""


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self):
        self.value = 0.0

    def __call__(self):
        return self.value


def test_get_returns_none_for_unknown_key():
    assert InMemoryListCache().get("missing") is None


def test_get_returns_copy_of_list():
    cache = InMemoryListCache()
    cache.put("k", [Item("a")])

    items = cache.get("k")
    items.append(Item("b"))

    assert cache.get("k") == [Item("a")]


def test_empty_list_is_a_hit():
    cache = InMemoryListCache()
    cache.put("k", [])

    assert cache.get("k") == []


def test_extend_ignores_cold_key_unless_created():
    cache = InMemoryListCache()

    cache.extend("k", [Item("a")])
    assert cache.get("k") is None

    cache.extend("k", [Item("a")], create=True)
    cache.extend("k", [Item("b")])
    assert [i.id for i in cache.get("k")] == ["a", "b"]


def test_patch_replaces_matching_items_only():
    cache = InMemoryListCache()
    cache.put("k", [Item("a", "old"), Item("b", "old")])

    cache.patch("k", ["b"], {"label": "new"})

    assert cache.get("k") == [Item("a", "old"), Item("b", "new")]


def test_patch_and_remove_leave_cold_keys_cold():
    cache = InMemoryListCache()

    cache.patch("k", ["a"], {"label": "x"})
    cache.remove("k", ["a"])

    assert cache.keys() == []


def test_remove_drops_items():
    cache = InMemoryListCache()
    cache.put("k", [Item("a"), Item("b"), Item("c")])

    cache.remove("k", ["a", "c"])

    assert cache.get("k") == [Item("b")]


def test_invalidate_and_clear():
    cache = InMemoryListCache()
    cache.put("k1", [Item("a")])
    cache.put("k2", [Item("b")])

    cache.invalidate("k1")
    assert cache.keys() == ["k2"]

    cache.clear()
    assert cache.keys() == []


def test_never_expire_keeps_entries():
    clock = FakeClock()
    cache = InMemoryListCache(policy=NeverExpire(), clock=clock)
    cache.put("k", [Item("a")])

    clock.value = 10 ** 9

    assert cache.get("k") == [Item("a")]


def test_time_to_live_expires_entries():
    clock = FakeClock()
    cache = InMemoryListCache(policy=TimeToLive(30), clock=clock)
    cache.put("k", [Item("a")])

    clock.value = 29.9
    assert cache.get("k") == [Item("a")]

    clock.value = 30.0
    assert cache.get("k") is None
    assert cache.keys() == []


def test_mutations_do_not_extend_time_to_live():
    clock = FakeClock()
    cache = InMemoryListCache(policy=TimeToLive(30), clock=clock)
    cache.put("k", [Item("a")])

    clock.value = 20
    cache.extend("k", [Item("b")])
    cache.patch("k", ["a"], {"label": "x"})

    clock.value = 31
    assert cache.get("k") is None


def test_expired_entry_is_not_extended():
    clock = FakeClock()
    cache = InMemoryListCache(policy=TimeToLive(5), clock=clock)
    cache.put("k", [Item("a")])

    clock.value = 6
    cache.extend("k", [Item("b")])

    assert cache.get("k") is None


@pytest.mark.parametrize("seconds", [0, -1])
def test_time_to_live_must_be_positive(seconds):
    with pytest.raises(ValueError, match="TTL must be positive"):
        TimeToLive(seconds)
