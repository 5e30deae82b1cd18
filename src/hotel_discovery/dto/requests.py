"""Request DTOs for API endpoints."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class HotelSearchRequest(BaseModel):
    """Request DTO for a paged hotel search.

    Either ``city_id`` or both ``lat`` and ``lng`` are required; the handler
    passes cross-field rules (location, date order) to the service layer.
    """

    city_id: str | None = Field(None, description="Provider city code, e.g. 'NYC'", min_length=1)
    lat: float | None = Field(None, description="Latitude of the search point", ge=-90.0, le=90.0)
    lng: float | None = Field(None, description="Longitude of the search point", ge=-180.0, le=180.0)
    checkin: date = Field(..., description="Check-in date (YYYY-MM-DD)")
    checkout: date = Field(..., description="Check-out date (YYYY-MM-DD)")
    guests: int = Field(2, description="Number of guests", ge=1)
    sort: Literal["price", "rating", "distance"] = Field("price", description="Result order")
    radius_meters: float | None = Field(
        None,
        description="Search radius around lat/lng in meters",
        gt=0,
    )
    page: int = Field(1, description="1-indexed page number; values below 1 mean the first page")
    limit: int = Field(20, description="Page size", ge=1, le=100)


class NearestHotelsRequest(BaseModel):
    """Request DTO for ranked nearest-hotel lookups."""

    lat: float = Field(..., description="Latitude of the reference point", ge=-90.0, le=90.0)
    lng: float = Field(..., description="Longitude of the reference point", ge=-180.0, le=180.0)
    radius_meters: float | None = Field(
        None,
        description="Search radius in meters (server default if omitted)",
        gt=0,
    )
    checkin: date | None = Field(None, description="Optional check-in date")
    checkout: date | None = Field(None, description="Optional check-out date")
    guests: int = Field(2, description="Number of guests", ge=1)
    limit: int = Field(20, description="Maximum number of ranked hotels", ge=1, le=100)
    max_price: float | None = Field(None, description="Drop hotels priced above this", ge=0)
    min_rating: float | None = Field(
        None,
        description="Drop hotels rated below this",
        ge=0.0,
        le=5.0,
    )
