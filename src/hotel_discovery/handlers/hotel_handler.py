"""HTTP handlers for hotel discovery operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import HTTPException, status

from hotel_discovery.dto import (
    CacheStatsResponse,
    HealthCheckResponse,
    HotelItem,
    HotelSearchRequest,
    HotelSearchResponse,
    NearestHotelsRequest,
    NearestHotelsResponse,
    PageMetaItem,
    ScoredHotelItem,
    SweepResponse,
)
from hotel_discovery.entities import Hotel, NearestQuery, ScoredHotel, SearchParams
from hotel_discovery.errors import InvalidQueryError
from hotel_discovery.services import HotelSearchService

logger = logging.getLogger(__name__)


def _hotel_item(hotel: Hotel) -> HotelItem:
    return HotelItem.model_validate(hotel.to_dict())


def _scored_item(scored: ScoredHotel) -> ScoredHotelItem:
    distance = scored.distance
    return ScoredHotelItem(
        hotel=_hotel_item(scored.hotel),
        scores={
            "price": scored.scores.price,
            "rating": scored.scores.rating,
            "distance": scored.scores.distance,
            "combined": scored.scores.combined,
        },
        distance=(
            {
                "meters": distance.meters,
                "kilometers": distance.kilometers,
                "miles": distance.miles,
            }
            if distance
            else None
        ),
    )


class HotelHandler:
    """HTTP handlers for hotel discovery operations.

    This handler delegates business logic to HotelSearchService
    and handles HTTP-specific concerns like:
    - Converting DTOs to entities and back
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        handler = HotelHandler(hotel_service=service)

        @app.post("/hotels/nearest", response_model=NearestHotelsResponse)
        async def nearest(request: NearestHotelsRequest):
            return await handler.find_nearest(request)
        ```
    """

    def __init__(self, hotel_service: HotelSearchService) -> None:
        """Initialize the hotel handler.

        Args:
            hotel_service: The hotel service for business logic (required).
        """
        self._hotels = hotel_service

    async def search_hotels(self, request: HotelSearchRequest) -> HotelSearchResponse:
        """Handle POST /hotels/search requests.

        Args:
            request: The search request DTO

        Returns:
            HotelSearchResponse with one page of hotels

        Raises:
            HTTPException: 400 for invalid queries, 500 for anything else
        """
        params = SearchParams(
            city_id=request.city_id,
            lat=request.lat,
            lng=request.lng,
            checkin=request.checkin,
            checkout=request.checkout,
            guests=request.guests,
            sort=request.sort,
            radius_meters=request.radius_meters,
            page=request.page,
            limit=request.limit,
        )

        try:
            result = await self._hotels.search_hotels(params)
        except InvalidQueryError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e
        except Exception as e:
            logger.exception("Hotel search failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to search hotels: {e}",
            ) from e

        meta = result.page.meta
        return HotelSearchResponse(
            hotels=[_hotel_item(hotel) for hotel in result.page.items],
            meta=PageMetaItem(
                page=meta.page,
                limit=meta.limit,
                total=meta.total,
                total_pages=meta.total_pages,
                has_next_page=meta.has_next_page,
                has_prev_page=meta.has_prev_page,
            ),
            provider=result.provider,
            fallback_used=result.fallback_used,
            cached=result.cached,
        )

    async def find_nearest(self, request: NearestHotelsRequest) -> NearestHotelsResponse:
        """Handle POST /hotels/nearest requests.

        Args:
            request: The nearest request DTO

        Returns:
            NearestHotelsResponse with hotels ranked by combined score

        Raises:
            HTTPException: 400 for invalid queries, 500 for anything else
        """
        query = NearestQuery(
            lat=request.lat,
            lng=request.lng,
            radius_meters=request.radius_meters,
            checkin=request.checkin,
            checkout=request.checkout,
            guests=request.guests,
            limit=request.limit,
            max_price=request.max_price,
            min_rating=request.min_rating,
        )

        try:
            result = await self._hotels.find_nearest_hotels(query)
        except InvalidQueryError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e
        except Exception as e:
            logger.exception("Nearest hotel lookup failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to find nearest hotels: {e}",
            ) from e

        return NearestHotelsResponse(
            hotels=[_scored_item(item) for item in result.items],
            reference_point={
                "lat": result.reference_point.lat,
                "lng": result.reference_point.lng,
            },
            search_radius=result.search_radius,
            provider=result.provider,
            fallback_used=result.fallback_used,
            cached=result.cached,
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /hotels/cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._hotels.get_stats()

            return CacheStatsResponse(
                **stats["cache"],
                provider=stats["provider"],
                ttl_seconds=stats["ttl_seconds"],
                fallback_ttl_seconds=stats["fallback_ttl_seconds"],
                metrics=stats["metrics"],
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def sweep_cache(self) -> SweepResponse:
        """Handle POST /hotels/cache/sweep requests."""
        try:
            count = self._hotels.sweep_expired()

            return SweepResponse(
                success=True,
                deleted_count=count,
                message=f"Removed {count} expired entries",
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to sweep cache: {e}",
            ) from e

    async def clear_cache(self) -> SweepResponse:
        """Handle DELETE /hotels/cache requests."""
        try:
            count = self._hotels.clear_cache()

            return SweepResponse(
                success=True,
                deleted_count=count,
                message="Cache cleared successfully",
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = self._hotels.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
            provider=self._hotels.gateway.active_provider,
        )
