from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_discovery.api.dependencies import HandlerDep, lifespan
from hotel_discovery.config import settings
from hotel_discovery.dto import (
    CacheStatsResponse,
    HealthCheckResponse,
    HotelSearchRequest,
    HotelSearchResponse,
    NearestHotelsRequest,
    NearestHotelsResponse,
    SweepResponse,
)
from hotel_discovery.services import HotelSearchService

API_TITLE = "Hotel Discovery API"
API_VERSION = "0.1.0"
API_DESCRIPTION = "Cached hotel search and nearest-hotel ranking over interchangeable providers"


def create_app(hotel_service: HotelSearchService | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        hotel_service: Pre-built service to serve requests with. If None,
            the lifespan builds one from settings.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )
    if hotel_service is not None:
        app.state.hotel_service = hotel_service

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "endpoints": {
                "search": "/hotels/search",
                "nearest": "/hotels/nearest",
                "stats": "/hotels/cache/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/hotels/search", response_model=HotelSearchResponse)
    async def search_hotels(
        request: HotelSearchRequest, handler: HandlerDep
    ) -> HotelSearchResponse:
        """
        Search hotels by city or coordinates.

        Returns one page of the cached result set; every page of the same
        query is served from a single provider call.
        """
        return await handler.search_hotels(request)

    @app.post("/hotels/nearest", response_model=NearestHotelsResponse)
    async def nearest_hotels(
        request: NearestHotelsRequest, handler: HandlerDep
    ) -> NearestHotelsResponse:
        """
        Rank hotels around a point by price, rating and distance.
        """
        return await handler.find_nearest(request)

    @app.get("/hotels/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics and service metrics."""
        return await handler.get_stats()

    @app.post("/hotels/cache/sweep", response_model=SweepResponse)
    async def sweep_cache(handler: HandlerDep) -> SweepResponse:
        """Remove expired cache entries now."""
        return await handler.sweep_cache()

    @app.delete("/hotels/cache", response_model=SweepResponse)
    async def clear_cache(handler: HandlerDep) -> SweepResponse:
        """Clear all entries from the cache."""
        return await handler.clear_cache()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hotel_discovery.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
