"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from hotel_discovery.config import settings
from hotel_discovery.handlers import HotelHandler
from hotel_discovery.protocols import CacheStore
from hotel_discovery.repositories import InMemoryCacheRepository, RedisCacheRepository
from hotel_discovery.services import HotelSearchService, ProviderGateway

logger = logging.getLogger(__name__)


def get_hotel_service(request: Request) -> HotelSearchService:
    """Dependency injection for HotelSearchService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The HotelSearchService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "hotel_service", None)
    if service is None:
        raise RuntimeError("HotelSearchService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> HotelHandler:
    """Dependency injection for HotelHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The HotelHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "hotel_handler", None)
    if handler is None:
        raise RuntimeError("HotelHandler not initialized. Check lifespan setup.")
    return handler


def build_cache_store() -> CacheStore:
    """Create the cache backend selected by CACHE_BACKEND."""
    if settings.cache_backend == "memory":
        return InMemoryCacheRepository()
    return RedisCacheRepository.create()


async def sweep_periodically(service: HotelSearchService, interval_seconds: float) -> None:
    """Remove expired cache entries every ``interval_seconds`` until cancelled.

    A failed sweep is logged and retried on the next tick.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await asyncio.to_thread(service.sweep_expired)
        except Exception:
            logger.exception("Periodic cache sweep failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repository (data access) - Redis or in-memory per CACHE_BACKEND
    2. Gateway (provider adapters + synthetic fallback)
    3. Service (business logic) - stored in app.state.hotel_service
    4. Handler (HTTP endpoints) - stored in app.state.hotel_handler

    A service placed in app.state.hotel_service before startup (see
    ``create_app``) is used as-is and not closed on shutdown.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Stops the sweep task, closes provider clients and removes all
        services from app.state on shutdown
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    hotel_service = getattr(app.state, "hotel_service", None)
    owns_service = hotel_service is None
    if owns_service:
        hotel_service = HotelSearchService.create(
            cache_store=build_cache_store(),
            gateway=ProviderGateway.create(),
        )

    app.state.hotel_service = hotel_service
    app.state.hotel_handler = HotelHandler(hotel_service=hotel_service)

    sweep_task = None
    if settings.cache_sweep_interval_seconds > 0:
        sweep_task = asyncio.create_task(
            sweep_periodically(hotel_service, settings.cache_sweep_interval_seconds)
        )

    logger.info("Hotel discovery service initialized")
    logger.info("Provider: %s", hotel_service.gateway.active_provider)
    logger.info("Cache backend: %s", type(hotel_service.cache_store).__name__)
    logger.info("Health: %s", hotel_service.is_healthy())

    yield

    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass

    if owns_service:
        await hotel_service.close()

    # Cleanup - remove from app.state
    del app.state.hotel_handler
    del app.state.hotel_service
    logger.info("Hotel discovery service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[HotelHandler, Depends(get_handler)]
ServiceDep = Annotated[HotelSearchService, Depends(get_hotel_service)]
