"""Hotel Discovery - cached hotel search and nearest-hotel ranking.

This package provides a layered architecture for hotel discovery:

Layers:
    - protocols: Interface contracts (CacheStore, HotelProvider)
    - repositories: Cache backends and provider adapters
    - services: Business logic (gateway, scoring, search orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from hotel_discovery.repositories import InMemoryCacheRepository
    from hotel_discovery.services import HotelSearchService, ProviderGateway

    service = HotelSearchService.create(
        cache_store=InMemoryCacheRepository(),
        gateway=ProviderGateway.create(),
    )
    result = await service.find_nearest_hotels(NearestQuery(lat=40.7128, lng=-74.006))
    ```

For HTTP API:
    ```python
    from hotel_discovery.api.app import app
    ```
"""

from hotel_discovery.config import get_redis_client, settings
from hotel_discovery.dto import HotelSearchRequest, NearestHotelsRequest
from hotel_discovery.entities import (
    Hotel,
    NearestQuery,
    ScoringConfig,
    SearchParams,
)
from hotel_discovery.errors import (
    CacheUnavailableError,
    ExhaustedFallbackError,
    HotelDiscoveryError,
    InvalidQueryError,
)
from hotel_discovery.handlers import HotelHandler
from hotel_discovery.protocols import CacheStore, HotelProvider
from hotel_discovery.repositories import InMemoryCacheRepository, RedisCacheRepository
from hotel_discovery.services import HotelSearchService, ProviderGateway

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "HotelProvider",
    # Services (business logic)
    "HotelSearchService",
    "ProviderGateway",
    # Handlers (HTTP)
    "HotelHandler",
    # Repositories (data access)
    "RedisCacheRepository",
    "InMemoryCacheRepository",
    # Entities (domain models)
    "Hotel",
    "NearestQuery",
    "ScoringConfig",
    "SearchParams",
    # Errors
    "HotelDiscoveryError",
    "InvalidQueryError",
    "CacheUnavailableError",
    "ExhaustedFallbackError",
    # DTOs (API contracts)
    "HotelSearchRequest",
    "NearestHotelsRequest",
]
