"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from hotel_discovery.repositories import RedisCacheRepository
    from hotel_discovery.services import HotelSearchService, ProviderGateway

    service = HotelSearchService.create(
        cache_store=RedisCacheRepository.create(),
        gateway=ProviderGateway.create(),
    )
    ```
"""

from .hotel_service import HotelSearchService
from .provider_gateway import ProviderGateway
from .scoring import rank_hotels, score_hotel
from .validation import validate_nearest_query, validate_search_params

__all__ = [
    "HotelSearchService",
    "ProviderGateway",
    "rank_hotels",
    "score_hotel",
    "validate_nearest_query",
    "validate_search_params",
]
