"""
Tests for the in-memory cache store.
"""

from hotel_discovery.protocols import CacheStore
from hotel_discovery.repositories import InMemoryCacheRepository

from conftest import START, make_hotel

TTL = 3600


def test_satisfies_cache_store_protocol(clock):
    assert isinstance(InMemoryCacheRepository(clock=clock), CacheStore)


def test_miss_on_empty_store(clock, search_params):
    assert InMemoryCacheRepository(clock=clock).find(search_params) is None


def test_entry_lives_until_ttl(clock, search_params):
    """Live at T-1s, absent at T+1s."""
    store = InMemoryCacheRepository(clock=clock)
    store.upsert(search_params, [make_hotel("a")], "amadeus", TTL)

    clock.advance(TTL - 1)
    entry = store.find(search_params)
    assert entry is not None
    assert entry.items[0].id == "a"

    clock.advance(2)
    assert store.find(search_params) is None


def test_find_updates_access_statistics(clock, search_params):
    store = InMemoryCacheRepository(clock=clock)
    stored = store.upsert(search_params, [make_hotel("a")], "amadeus", TTL)
    assert stored.access_count == 1

    clock.advance(10)
    entry = store.find(search_params)
    assert entry.access_count == 2
    assert entry.last_accessed_at == START.replace(second=10)
    assert entry.created_at == START


def test_upsert_is_idempotent_per_fingerprint(clock, search_params):
    """Upserting twice keeps one entry, its creation time and the latest items."""
    store = InMemoryCacheRepository(clock=clock)
    store.upsert(search_params, [make_hotel("old")], "amadeus", TTL)
    clock.advance(60)
    entry = store.upsert(search_params, [make_hotel("new"), make_hotel("newer")], "booking", TTL)

    assert len(store) == 1
    assert entry.created_at == START
    assert entry.access_count == 2
    assert entry.provider == "booking"
    assert entry.total_results == 2
    assert [hotel.id for hotel in store.find(search_params).items] == ["new", "newer"]


def test_upsert_over_expired_entry_starts_fresh(clock, search_params):
    store = InMemoryCacheRepository(clock=clock)
    store.upsert(search_params, [make_hotel("a")], "amadeus", 10)
    clock.advance(20)
    entry = store.upsert(search_params, [make_hotel("b")], "amadeus", 10)
    assert entry.created_at == clock.now
    assert entry.access_count == 1


def test_sweep_removes_only_expired(clock, search_params):
    store = InMemoryCacheRepository(clock=clock)
    short_lived = search_params.with_page(2)
    store.upsert(short_lived, [make_hotel("a")], "amadeus", 10)
    store.upsert(search_params, [make_hotel("b")], "amadeus", TTL)

    clock.advance(11)
    assert store.sweep_expired() == 1
    assert len(store) == 1
    assert store.find(search_params) is not None


def test_stats_and_clear(clock, search_params):
    store = InMemoryCacheRepository(clock=clock)
    store.upsert(search_params, [make_hotel("a"), make_hotel("b")], "amadeus", TTL)
    clock.advance(5)
    store.upsert(search_params.with_page(2), [make_hotel("c")], "amadeus", TTL)

    stats = store.stats()
    assert stats.total_entries == 2
    assert stats.total_items == 3
    assert stats.avg_access_count == 1.0
    assert stats.oldest_entry == START
    assert stats.newest_entry == clock.now

    assert store.delete(search_params) is True
    assert store.delete(search_params) is False
    assert store.clear_all() == 1
    assert store.stats().total_entries == 0
