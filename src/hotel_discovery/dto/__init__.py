"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import HotelSearchRequest, NearestHotelsRequest
from .responses import (
    CacheStatsResponse,
    HealthCheckResponse,
    HotelItem,
    HotelSearchResponse,
    NearestHotelsResponse,
    PageMetaItem,
    ScoredHotelItem,
    SweepResponse,
)

__all__ = [
    "HotelSearchRequest",
    "NearestHotelsRequest",
    "HotelItem",
    "PageMetaItem",
    "HotelSearchResponse",
    "ScoredHotelItem",
    "NearestHotelsResponse",
    "CacheStatsResponse",
    "SweepResponse",
    "HealthCheckResponse",
]
