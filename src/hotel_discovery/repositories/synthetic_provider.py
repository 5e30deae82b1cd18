"""Synthetic hotel generator used when the configured provider fails.

Results are plausible but fake: a fixed number of hotels scattered within
roughly half a kilometer of the query point, with bounded random prices,
ratings and amenities. Every hotel is tagged ``source="mock"`` so degraded
results can always be told apart from live ones.

The random generator is seeded from the query fingerprint, so the same
query always yields the same synthetic result set.
"""

import random

from hotel_discovery.entities import (
    Address,
    GeoPoint,
    Hotel,
    Ok,
    Photo,
    Price,
    ProviderPayload,
    ProviderResult,
    SearchParams,
)
from hotel_discovery.utils import fingerprint, haversine_distance

SOURCE = "mock"

DEFAULT_LOCATION = GeoPoint(lat=40.7128, lng=-74.0060)

HOTEL_NAMES = [
    "Grand Plaza Hotel",
    "Seaside Resort & Spa",
    "Downtown Business Inn",
    "Mountain View Lodge",
    "Riverside Hotel",
    "City Center Suites",
    "Harbor View Hotel",
    "Garden Court Inn",
    "Executive Plaza",
    "Heritage Hotel",
]

AMENITIES = [
    "WiFi",
    "Pool",
    "Gym",
    "Spa",
    "Restaurant",
    "Bar",
    "Room Service",
    "Free Breakfast",
    "Parking",
    "Airport Shuttle",
    "Business Center",
    "Concierge",
    "Laundry",
    "Pet Friendly",
    "Accessibility",
]

PHOTO_URLS = [
    "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=800&h=600&fit=crop",
]

# Width of the jitter window: ±0.005° (about ±550 m of latitude) around the query point
JITTER_DEGREES = 0.01


class SyntheticHotelProvider:
    """Deterministic fake provider satisfying the HotelProvider protocol.

    Example:
        ```python
        provider = SyntheticHotelProvider(result_count=20)
        result = await provider.search(SearchParams(lat=48.8566, lng=2.3522))
        assert all(h.source == "mock" for h in result.value.items)
        ```
    """

    def __init__(self, result_count: int = 20) -> None:
        """Initialize the generator.

        Args:
            result_count: Number of hotels produced per query.
        """
        if result_count < 1:
            raise ValueError("result_count must be at least 1")
        self._result_count = result_count

    @property
    def name(self) -> str:
        return SOURCE

    async def search(self, params: SearchParams) -> ProviderResult:
        hotels = self.generate(params)
        return Ok(ProviderPayload(items=hotels, total=len(hotels), has_more=False))

    def generate(self, params: SearchParams) -> tuple[Hotel, ...]:
        """Build the synthetic result set for a query."""
        rng = random.Random(int(fingerprint(params), 16))
        origin = (
            GeoPoint(lat=params.lat, lng=params.lng)
            if params.has_coordinates
            else DEFAULT_LOCATION
        )

        hotels = []
        for i in range(self._result_count):
            location = GeoPoint(
                lat=origin.lat + (rng.random() - 0.5) * JITTER_DEGREES,
                lng=origin.lng + (rng.random() - 0.5) * JITTER_DEGREES,
            )
            street_number = rng.randint(1, 9999)
            hotel_id = f"{SOURCE}_{i + 1}"
            hotels.append(
                Hotel(
                    id=hotel_id,
                    name=HOTEL_NAMES[i % len(HOTEL_NAMES)],
                    rating=round(rng.uniform(3.0, 5.0), 1),
                    price=Price(amount=float(rng.randint(50, 249)), currency="USD"),
                    location=location,
                    distance_meters=round(
                        haversine_distance(origin.lat, origin.lng, location.lat, location.lng), 1
                    ),
                    address=Address(
                        street=f"{street_number} Main St",
                        city=params.city_id,
                        formatted=(
                            f"{street_number} Main St, {params.city_id}"
                            if params.city_id
                            else f"{street_number} Main St"
                        ),
                    ),
                    amenities=frozenset(rng.sample(AMENITIES, rng.randint(3, 10))),
                    photos=tuple(
                        Photo(url=url, caption=f"Hotel room {index + 1}", width=800, height=600)
                        for index, url in enumerate(PHOTO_URLS)
                    ),
                    booking_url=f"https://example.com/book/{i + 1}",
                    source=SOURCE,
                    external_id=hotel_id,
                )
            )
        return tuple(hotels)

    async def close(self) -> None:
        return None
