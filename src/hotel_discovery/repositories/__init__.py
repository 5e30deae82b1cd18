"""Repository layer for data access.

This layer abstracts external dependencies (Redis, hotel APIs) behind
protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, Amadeus → Booking.com, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from hotel_discovery.protocols import CacheStore, HotelProvider

from .amadeus_provider import AmadeusHotelProvider
from .booking_provider import BookingHotelProvider
from .google_places_provider import GooglePlacesHotelProvider
from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository
from .synthetic_provider import SyntheticHotelProvider

__all__ = [
    "CacheStore",
    "HotelProvider",
    "RedisCacheRepository",
    "InMemoryCacheRepository",
    "AmadeusHotelProvider",
    "BookingHotelProvider",
    "GooglePlacesHotelProvider",
    "SyntheticHotelProvider",
]
