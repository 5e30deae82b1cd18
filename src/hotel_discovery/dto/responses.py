"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class PriceItem(BaseModel):
    amount: float = Field(..., description="Nightly price")
    currency: str = Field("USD", description="ISO currency code")


class LocationItem(BaseModel):
    lat: float
    lng: float


class AddressItem(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    formatted: str | None = None


class PhotoItem(BaseModel):
    url: str
    caption: str | None = None
    width: int | None = None
    height: int | None = None


class HotelItem(BaseModel):
    """Single hotel (in hotels array)."""

    id: str = Field(..., description="Identifier unique within the result set")
    name: str = Field(..., description="Display name")
    rating: float | None = Field(None, description="Guest rating (0-5)")
    price: PriceItem | None = Field(None, description="Nightly price, null if unknown")
    location: LocationItem | None = Field(None, description="Hotel coordinates")
    distance_meters: float | None = Field(None, description="Distance reported by the provider")
    address: AddressItem = Field(default_factory=AddressItem)
    amenities: list[str] = Field(default_factory=list, description="Amenity labels, sorted")
    photos: list[PhotoItem] = Field(default_factory=list)
    booking_url: str | None = Field(None, description="Deep link for booking")
    source: str = Field(..., description="Provider name, 'mock' for synthetic results")
    external_id: str | None = Field(None, description="Identifier in the provider's system")


class PageMetaItem(BaseModel):
    """Pagination metadata."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., description="Size of the full result set", ge=0)
    total_pages: int = Field(..., ge=0)
    has_next_page: bool
    has_prev_page: bool


class HotelSearchResponse(BaseModel):
    """Response DTO for a paged hotel search."""

    hotels: list[HotelItem] = Field(default_factory=list, description="Hotels on this page")
    meta: PageMetaItem
    provider: str = Field(..., description="Source of the data ('mock' on fallback)")
    fallback_used: bool = Field(False, description="Whether synthetic data replaced the provider")
    cached: bool = Field(False, description="Whether the result set came from the cache")


class ScoresItem(BaseModel):
    """Per-axis scores, all in [0, 1]."""

    price: float = Field(..., ge=0.0, le=1.0)
    rating: float = Field(..., ge=0.0, le=1.0)
    distance: float = Field(..., ge=0.0, le=1.0)
    combined: float = Field(..., ge=0.0, le=1.0)


class DistanceItem(BaseModel):
    meters: float
    kilometers: float
    miles: float


class ScoredHotelItem(BaseModel):
    """Ranked hotel (in nearest hotels array)."""

    hotel: HotelItem
    scores: ScoresItem
    distance: DistanceItem | None = Field(None, description="Null when the hotel has no location")


class NearestHotelsResponse(BaseModel):
    """Response DTO for nearest-hotel ranking.

    Hotels are sorted by combined score, best first.
    """

    hotels: list[ScoredHotelItem] = Field(default_factory=list)
    reference_point: LocationItem
    search_radius: float = Field(
        ...,
        description="Largest distance among the returned hotels in meters",
        ge=0.0,
    )
    provider: str
    fallback_used: bool = False
    cached: bool = False


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Number of stored entries", ge=0)
    total_items: int = Field(..., description="Hotels across all entries", ge=0)
    avg_access_count: float = Field(..., ge=0.0)
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None
    provider: str = Field(..., description="Configured provider")
    ttl_seconds: int = Field(..., description="Lifetime of live results", ge=0)
    fallback_ttl_seconds: int = Field(..., description="Lifetime of synthetic results", ge=0)
    metrics: dict[str, Any] = Field(default_factory=dict, description="Service counters")


class SweepResponse(BaseModel):
    """Response DTO for sweep and clear operations."""

    success: bool
    deleted_count: int = Field(..., ge=0)
    message: str


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    provider: str = Field(..., description="Configured hotel provider")
