"""
Tests for the hotel search service (search and nearest paths end to end).
"""

from datetime import date

import pytest

from hotel_discovery.entities import NearestQuery, ScoringConfig, SearchParams
from hotel_discovery.errors import InvalidQueryError
from hotel_discovery.repositories import (
    InMemoryCacheRepository,
    RedisCacheRepository,
    SyntheticHotelProvider,
)
from hotel_discovery.services import HotelSearchService, ProviderGateway

from conftest import DownRedis, FailingProvider, StaticProvider, make_hotel

ORIGIN = (40.7128, -74.0060)


def build_service(provider, clock, store=None, result_count=20) -> HotelSearchService:
    gateway = ProviderGateway(
        [provider],
        active=provider.name,
        fallback=SyntheticHotelProvider(result_count=result_count),
        timeout_seconds=1.0,
    )
    return HotelSearchService(
        cache_store=store or InMemoryCacheRepository(clock=clock),
        gateway=gateway,
        scoring=ScoringConfig(),
        ttl_seconds=3600,
        fallback_ttl_seconds=300,
        default_radius_meters=5000,
    )


@pytest.fixture
def live_hotels():
    return [
        make_hotel(f"h{i}", price=60.0 + 10 * i, rating=4.5 - 0.1 * i, distance_meters=100.0 * (i + 1))
        for i in range(12)
    ]


@pytest.mark.anyio
async def test_nearest_end_to_end_with_fallback(clock):
    """A failing provider still yields 5 ranked synthetic hotels out of 20."""
    service = build_service(FailingProvider(kind="network"), clock)

    result = await service.find_nearest_hotels(NearestQuery(lat=ORIGIN[0], lng=ORIGIN[1], limit=5))

    assert result.fallback_used is True
    assert result.provider == "mock"
    assert len(result.items) == 5
    combined = [item.combined_score for item in result.items]
    assert combined == sorted(combined, reverse=True)
    assert all(item.hotel.source == "mock" for item in result.items)
    assert result.search_radius == max(item.distance_meters for item in result.items)
    assert (result.reference_point.lat, result.reference_point.lng) == ORIGIN


@pytest.mark.anyio
async def test_nearest_results_are_cached_and_rescored(clock, live_hotels):
    provider = StaticProvider(live_hotels)
    service = build_service(provider, clock)
    query = NearestQuery(lat=ORIGIN[0], lng=ORIGIN[1], limit=5)

    first = await service.find_nearest_hotels(query)
    second = await service.find_nearest_hotels(query)

    assert len(provider.calls) == 1
    assert provider.calls[0].sort == "distance"
    assert provider.calls[0].radius_meters == 5000
    assert first.cached is False
    assert second.cached is True
    assert [i.hotel.id for i in first.items] == [i.hotel.id for i in second.items]


@pytest.mark.anyio
async def test_nearest_filters_do_not_split_the_cache(clock, live_hotels):
    provider = StaticProvider(live_hotels)
    service = build_service(provider, clock)

    await service.find_nearest_hotels(NearestQuery(lat=ORIGIN[0], lng=ORIGIN[1]))
    filtered = await service.find_nearest_hotels(
        NearestQuery(lat=ORIGIN[0], lng=ORIGIN[1], max_price=100.0, min_rating=4.15)
    )

    assert len(provider.calls) == 1
    assert {item.hotel.id for item in filtered.items} == {"h0", "h1", "h2", "h3"}


@pytest.mark.anyio
async def test_nearest_empty_result_has_zero_radius(clock):
    service = build_service(StaticProvider([make_hotel("far", price=500.0)]), clock)

    result = await service.find_nearest_hotels(
        NearestQuery(lat=ORIGIN[0], lng=ORIGIN[1], max_price=100.0)
    )

    assert result.items == ()
    assert result.search_radius == 0.0


@pytest.mark.anyio
async def test_search_pages_share_one_cache_entry(clock, live_hotels, search_params):
    provider = StaticProvider(list(reversed(live_hotels)))
    service = build_service(provider, clock)

    first = await service.search_hotels(SearchParams(**{**vars(search_params), "limit": 5}))
    third = await service.search_hotels(SearchParams(**{**vars(search_params), "limit": 5, "page": 3}))

    assert len(provider.calls) == 1
    assert first.cached is False and third.cached is True
    assert [hotel.id for hotel in first.page.items] == ["h0", "h1", "h2", "h3", "h4"]
    assert [hotel.id for hotel in third.page.items] == ["h10", "h11"]
    assert third.page.meta.total == 12
    assert third.page.meta.total_pages == 3
    assert third.page.meta.has_next_page is False
    assert third.page.meta.has_prev_page is True


@pytest.mark.anyio
async def test_distance_sort_computes_missing_distances(clock, search_params):
    """Providers without reported distances are still sorted nearest first."""
    far = make_hotel("far", lat=40.80, lng=-74.0060, source="google")
    near = make_hotel("near", lat=40.7130, lng=-74.0060, source="google")
    service = build_service(StaticProvider([far, near], name="google"), clock)

    result = await service.search_hotels(SearchParams(**{**vars(search_params), "sort": "distance"}))

    assert [hotel.id for hotel in result.page.items] == ["near", "far"]


@pytest.mark.anyio
async def test_cache_entry_expires_after_ttl(clock, live_hotels, search_params):
    provider = StaticProvider(live_hotels)
    service = build_service(provider, clock)

    await service.search_hotels(search_params)
    clock.advance(3599)
    await service.search_hotels(search_params)
    assert len(provider.calls) == 1

    clock.advance(2)
    await service.search_hotels(search_params)
    assert len(provider.calls) == 2


@pytest.mark.anyio
async def test_fallback_results_use_short_ttl(clock, search_params):
    provider = FailingProvider()
    service = build_service(provider, clock)

    await service.search_hotels(search_params)
    clock.advance(301)
    result = await service.search_hotels(search_params)

    assert len(provider.calls) == 2
    assert result.fallback_used is True
    assert result.provider == "mock"
    assert service.metrics.fallbacks == 2


@pytest.mark.anyio
async def test_unavailable_cache_is_treated_as_miss(clock, live_hotels, search_params):
    provider = StaticProvider(live_hotels)
    store = RedisCacheRepository(redis_client=DownRedis(), key_prefix="test", clock=clock)
    service = build_service(provider, clock, store=store)

    result = await service.search_hotels(search_params)

    assert result.cached is False
    assert len(result.page.items) == 12
    assert service.metrics.cache_errors == 2
    assert service.is_healthy() is False


@pytest.mark.anyio
@pytest.mark.parametrize(
    "overrides",
    [
        {"lat": None, "lng": None},
        {"lng": None},
        {"checkin": None, "checkout": None},
        {"checkout": date(2026, 3, 10)},
        {"guests": 0},
        {"limit": 0},
        {"limit": 101},
        {"lat": 91.0},
        {"radius_meters": -1.0},
        {"sort": "popularity"},
    ],
)
async def test_invalid_search_is_rejected_without_provider_call(clock, search_params, overrides):
    provider = StaticProvider([make_hotel("a")])
    service = build_service(provider, clock)

    with pytest.raises(InvalidQueryError):
        await service.search_hotels(SearchParams(**{**vars(search_params), **overrides}))

    assert provider.calls == []


@pytest.mark.anyio
async def test_search_by_city_without_coordinates(clock, search_params):
    provider = StaticProvider([make_hotel("a")])
    service = build_service(provider, clock)

    result = await service.search_hotels(
        SearchParams(**{**vars(search_params), "lat": None, "lng": None, "city_id": "NYC"})
    )

    assert provider.calls[0].city_id == "NYC"
    assert result.page.meta.total == 1


@pytest.mark.anyio
@pytest.mark.parametrize(
    "overrides",
    [
        {"checkin": date(2026, 3, 10)},
        {"min_rating": 6.0},
        {"max_price": -5.0},
        {"lat": -95.0},
    ],
)
async def test_invalid_nearest_is_rejected(clock, overrides):
    service = build_service(StaticProvider([]), clock)
    query = NearestQuery(**{"lat": ORIGIN[0], "lng": ORIGIN[1], **overrides})

    with pytest.raises(InvalidQueryError):
        await service.find_nearest_hotels(query)


@pytest.mark.anyio
async def test_stats_sweep_and_clear(clock, live_hotels, search_params):
    service = build_service(StaticProvider(live_hotels), clock)
    await service.search_hotels(search_params)
    await service.search_hotels(search_params)

    stats = service.get_stats()
    assert stats["cache"]["total_entries"] == 1
    assert stats["metrics"]["cache_hits"] == 1
    assert stats["metrics"]["cache_misses"] == 1
    assert stats["metrics"]["hit_rate"] == 0.5
    assert stats["provider"] == "amadeus"

    clock.advance(3601)
    assert service.sweep_expired() == 1
    await service.search_hotels(search_params)
    assert service.clear_cache() == 1
