"""
Tests for the synthetic hotel generator.
"""

from datetime import date

import pytest

from hotel_discovery.entities import Ok, SearchParams
from hotel_discovery.repositories import SyntheticHotelProvider
from hotel_discovery.repositories.synthetic_provider import AMENITIES, DEFAULT_LOCATION
from hotel_discovery.utils import haversine_distance


def test_same_query_yields_same_hotels(search_params):
    provider = SyntheticHotelProvider()
    assert provider.generate(search_params) == provider.generate(search_params)


def test_different_queries_yield_different_hotels(search_params):
    provider = SyntheticHotelProvider()
    other = SearchParams(lat=48.8566, lng=2.3522, checkin=date(2026, 3, 10), checkout=date(2026, 3, 12))
    assert provider.generate(search_params) != provider.generate(other)


def test_hotels_are_plausible(search_params):
    hotels = SyntheticHotelProvider(result_count=20).generate(search_params)

    assert len(hotels) == 20
    assert len({hotel.id for hotel in hotels}) == 20
    for hotel in hotels:
        assert hotel.source == "mock"
        assert 50 <= hotel.price.amount <= 249
        assert hotel.price.currency == "USD"
        assert 3.0 <= hotel.rating <= 5.0
        assert 3 <= len(hotel.amenities) <= 10
        assert hotel.amenities <= set(AMENITIES)
        assert len(hotel.photos) == 3
        assert abs(hotel.location.lat - search_params.lat) <= 0.005
        assert abs(hotel.location.lng - search_params.lng) <= 0.005
        expected = haversine_distance(
            search_params.lat, search_params.lng, hotel.location.lat, hotel.location.lng
        )
        assert hotel.distance_meters == pytest.approx(expected, abs=0.1)


def test_query_without_coordinates_uses_default_location():
    hotels = SyntheticHotelProvider(result_count=5).generate(SearchParams(city_id="PAR"))
    for hotel in hotels:
        assert abs(hotel.location.lat - DEFAULT_LOCATION.lat) <= 0.005
        assert hotel.address.city == "PAR"


@pytest.mark.anyio
async def test_search_returns_ok_payload(search_params):
    result = await SyntheticHotelProvider(result_count=7).search(search_params)
    assert isinstance(result, Ok)
    assert result.value.total == 7
    assert result.value.has_more is False


def test_result_count_must_be_positive():
    with pytest.raises(ValueError):
        SyntheticHotelProvider(result_count=0)
