"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity, CacheStats
from .hotel import Address, GeoPoint, Hotel, Photo, Price
from .page import HotelSearchResult, Page, PageMeta
from .provider_result import (
    Err,
    GatewayError,
    GatewayResult,
    Ok,
    ProviderPayload,
    ProviderResult,
)
from .ranking import DistanceInfo, HotelScores, NearestResult, ScoredHotel, ScoringConfig
from .search_params import NEAREST, SEARCH, SORT_OPTIONS, NearestQuery, SearchParams

__all__ = [
    "Address",
    "CacheEntryEntity",
    "CacheStats",
    "DistanceInfo",
    "Err",
    "GatewayError",
    "GatewayResult",
    "GeoPoint",
    "Hotel",
    "HotelScores",
    "HotelSearchResult",
    "NEAREST",
    "NearestQuery",
    "NearestResult",
    "Ok",
    "Page",
    "PageMeta",
    "Photo",
    "Price",
    "ProviderPayload",
    "ProviderResult",
    "SEARCH",
    "SORT_OPTIONS",
    "ScoredHotel",
    "ScoringConfig",
    "SearchParams",
]
