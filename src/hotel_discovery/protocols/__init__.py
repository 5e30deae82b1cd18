"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, Amadeus → Booking.com, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from hotel_discovery.protocols import CacheStore, HotelProvider

    # Type hints work with any implementation
    store: CacheStore = RedisCacheRepository.create()
    store: CacheStore = InMemoryCacheRepository()
    ```
"""

from .cache_store import CacheStore
from .hotel_provider import HotelProvider

__all__ = [
    "CacheStore",
    "HotelProvider",
]
