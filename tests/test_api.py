"""
Tests for the hotel discovery API.
"""

import pytest
from fastapi.testclient import TestClient

from hotel_discovery.api.app import create_app
from hotel_discovery.repositories import InMemoryCacheRepository, SyntheticHotelProvider
from hotel_discovery.services import HotelSearchService, ProviderGateway

from conftest import FailingProvider, StaticProvider, make_hotel

SEARCH_BODY = {
    "lat": 40.7128,
    "lng": -74.0060,
    "checkin": "2026-03-10",
    "checkout": "2026-03-12",
    "limit": 5,
}


class ExplodingFallback(StaticProvider):
    def __init__(self) -> None:
        super().__init__((), name="mock")

    async def search(self, params):
        raise RuntimeError("generator exploded")


def make_client(provider, fallback=None) -> TestClient:
    service = HotelSearchService(
        cache_store=InMemoryCacheRepository(),
        gateway=ProviderGateway(
            [provider],
            active=provider.name,
            fallback=fallback or SyntheticHotelProvider(),
        ),
        ttl_seconds=3600,
    )
    return TestClient(create_app(hotel_service=service))


@pytest.fixture
def client():
    """Create a test client backed by a static provider."""
    hotels = [
        make_hotel(f"h{i}", price=80.0 + i, rating=4.0, lat=40.7128, lng=-74.0060 + 0.001 * i)
        for i in range(8)
    ]
    with make_client(StaticProvider(hotels)) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Hotel Discovery API"
    assert "nearest" in data["endpoints"]


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache_healthy"] is True
    assert data["provider"] == "amadeus"


def test_search_returns_page_and_meta(client):
    response = client.post("/hotels/search", json=SEARCH_BODY)
    assert response.status_code == 200
    data = response.json()
    assert [hotel["id"] for hotel in data["hotels"]] == ["h0", "h1", "h2", "h3", "h4"]
    assert data["meta"] == {
        "page": 1,
        "limit": 5,
        "total": 8,
        "total_pages": 2,
        "has_next_page": True,
        "has_prev_page": False,
    }
    assert data["provider"] == "amadeus"
    assert data["cached"] is False

    second = client.post("/hotels/search", json={**SEARCH_BODY, "page": 2}).json()
    assert second["cached"] is True
    assert len(second["hotels"]) == 3


def test_search_page_below_one_serves_first_page(client):
    response = client.post("/hotels/search", json={**SEARCH_BODY, "page": 0})
    assert response.status_code == 200
    data = response.json()
    assert data["meta"]["page"] == 1
    assert [hotel["id"] for hotel in data["hotels"]] == ["h0", "h1", "h2", "h3", "h4"]


def test_search_with_checkout_before_checkin_is_400(client):
    response = client.post("/hotels/search", json={**SEARCH_BODY, "checkout": "2026-03-09"})
    assert response.status_code == 400
    assert "checkout" in response.json()["detail"]


def test_search_without_location_is_400(client):
    body = {key: value for key, value in SEARCH_BODY.items() if key not in ("lat", "lng")}
    response = client.post("/hotels/search", json=body)
    assert response.status_code == 400


def test_search_schema_violation_is_422(client):
    response = client.post("/hotels/search", json={**SEARCH_BODY, "limit": 500})
    assert response.status_code == 422


def test_nearest_returns_scores_and_distance(client):
    response = client.post(
        "/hotels/nearest",
        json={"lat": 40.7128, "lng": -74.0060, "limit": 3},
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["hotels"]) == 3
    combined = [item["scores"]["combined"] for item in data["hotels"]]
    assert combined == sorted(combined, reverse=True)
    assert data["hotels"][0]["hotel"]["id"] == "h0"
    assert data["hotels"][0]["distance"]["meters"] == 0.0
    assert data["reference_point"] == {"lat": 40.7128, "lng": -74.0060}
    assert data["search_radius"] == max(item["distance"]["meters"] for item in data["hotels"])


def test_nearest_falls_back_to_synthetic():
    with make_client(FailingProvider(kind="auth")) as test_client:
        response = test_client.post("/hotels/nearest", json={"lat": 48.8566, "lng": 2.3522})
    assert response.status_code == 200
    data = response.json()
    assert data["fallback_used"] is True
    assert data["provider"] == "mock"
    assert all(item["hotel"]["source"] == "mock" for item in data["hotels"])


def test_exhausted_fallback_is_500():
    with make_client(FailingProvider(), fallback=ExplodingFallback()) as test_client:
        response = test_client.post("/hotels/nearest", json={"lat": 48.8566, "lng": 2.3522})
    assert response.status_code == 500


def test_cache_stats_sweep_and_clear(client):
    client.post("/hotels/search", json=SEARCH_BODY)

    stats = client.get("/hotels/cache/stats")
    assert stats.status_code == 200
    data = stats.json()
    assert data["total_entries"] == 1
    assert data["total_items"] == 8
    assert data["ttl_seconds"] == 3600
    assert data["metrics"]["cache_misses"] == 1

    sweep = client.post("/hotels/cache/sweep")
    assert sweep.status_code == 200
    assert sweep.json()["deleted_count"] == 0

    cleared = client.delete("/hotels/cache")
    assert cleared.status_code == 200
    assert cleared.json()["deleted_count"] == 1
