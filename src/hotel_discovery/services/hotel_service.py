"""Hotel search service for core business logic.

This service orchestrates the cache store (result sets keyed by query
fingerprint), the provider gateway (live data with synthetic fallback) and
the ranking functions (nearest-hotel scoring) to serve paged searches and
ranked nearest-hotel lookups.
"""

import logging
from dataclasses import dataclass

from hotel_discovery.config import settings
from hotel_discovery.entities import (
    GeoPoint,
    Hotel,
    HotelSearchResult,
    NearestQuery,
    NearestResult,
    ScoringConfig,
    SearchParams,
)
from hotel_discovery.errors import CacheUnavailableError
from hotel_discovery.models import SearchMetrics
from hotel_discovery.protocols import CacheStore
from hotel_discovery.utils import paginate

from .provider_gateway import ProviderGateway
from .scoring import apply_filters, rank_hotels, sort_hotels
from .validation import validate_nearest_query, validate_search_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ResultSet:
    items: tuple[Hotel, ...]
    provider: str
    fallback_used: bool
    cached: bool


class HotelSearchService:
    """Core hotel discovery orchestration service.

    This service depends on a CacheStore PROTOCOL, not on a concrete
    backend, and receives every collaborator explicitly, so several
    independent caches (e.g. one per tenant) can live in one process.

    The cache is an optimization, never a hard dependency: a backend that
    raises CacheUnavailableError is treated as a miss on read and skipped on
    write.

    Example:
        ```python
        from hotel_discovery.repositories import InMemoryCacheRepository
        from hotel_discovery.services import HotelSearchService, ProviderGateway

        service = HotelSearchService.create(
            cache_store=InMemoryCacheRepository(),
            gateway=ProviderGateway.create(active="booking"),
        )
        result = await service.find_nearest_hotels(NearestQuery(lat=40.7128, lng=-74.006))
        ```
    """

    def __init__(
        self,
        cache_store: CacheStore,
        gateway: ProviderGateway,
        scoring: ScoringConfig | None = None,
        ttl_seconds: int | None = None,
        fallback_ttl_seconds: int | None = None,
        default_radius_meters: float | None = None,
        metrics: SearchMetrics | None = None,
    ) -> None:
        """Initialize the hotel search service.

        Args:
            cache_store: Cache backend (required).
            gateway: Provider gateway (required).
            scoring: Ranking weights and anchors. Defaults to settings.
            ttl_seconds: Lifetime of live results. Defaults to settings.
            fallback_ttl_seconds: Lifetime of synthetic results. Defaults to settings.
            default_radius_meters: Nearest radius when the query has none. Defaults to settings.
            metrics: Metrics collector. A fresh one is created if None.
        """
        self._cache = cache_store
        self._gateway = gateway
        self._scoring = scoring or settings.scoring
        self._ttl = ttl_seconds or settings.cache_ttl_seconds
        self._fallback_ttl = fallback_ttl_seconds or settings.cache_fallback_ttl_seconds
        self._default_radius = default_radius_meters or settings.default_radius_meters
        self._metrics = metrics or SearchMetrics()

    @classmethod
    def create(
        cls,
        cache_store: CacheStore,
        gateway: ProviderGateway,
        scoring: ScoringConfig | None = None,
        ttl_seconds: int | None = None,
    ) -> "HotelSearchService":
        """Factory method to create HotelSearchService with sensible defaults.

        Args:
            cache_store: Cache backend (required).
            gateway: Provider gateway (required).
            scoring: Ranking configuration. If None, uses settings.
            ttl_seconds: Live-result TTL. If None, uses settings.

        Returns:
            Configured HotelSearchService instance
        """
        return cls(
            cache_store=cache_store,
            gateway=gateway,
            scoring=scoring,
            ttl_seconds=ttl_seconds,
        )

    async def search_hotels(self, params: SearchParams) -> HotelSearchResult:
        """Search hotels and return one page of the result set.

        Business logic:
        1. Validate the query
        2. Look up the page-independent result set in the cache
        3. On a miss, query the provider gateway, sort, and cache the set
        4. Slice the requested page

        Args:
            params: The search query

        Returns:
            HotelSearchResult with the page and its provenance

        Raises:
            InvalidQueryError: If the query is malformed
            ExhaustedFallbackError: If no results could be produced at all
        """
        validate_search_params(params)

        # Every page of a query is served from the same entry
        result_set = await self._fetch(params.with_page(1), sort=params.sort)
        page = paginate(result_set.items, params.page, params.limit)

        return HotelSearchResult(
            page=page,
            provider=result_set.provider,
            fallback_used=result_set.fallback_used,
            cached=result_set.cached,
        )

    async def find_nearest_hotels(self, query: NearestQuery) -> NearestResult:
        """Find the best hotels around a point.

        Business logic:
        1. Validate the query
        2. Fetch raw hotels (cache, else gateway with sort=distance and the radius)
        3. Apply the optional price / rating filters
        4. Compute missing distances, score, rank, truncate to the limit

        Scores are recomputed on every call and never cached.

        Args:
            query: The nearest-hotel query

        Returns:
            NearestResult ranked by non-increasing combined score

        Raises:
            InvalidQueryError: If the query is malformed
            ExhaustedFallbackError: If no results could be produced at all
        """
        validate_nearest_query(query)

        params = query.to_search_params(self._default_radius)
        result_set = await self._fetch(params)

        origin = GeoPoint(lat=query.lat, lng=query.lng)
        candidates = apply_filters(result_set.items, query.max_price, query.min_rating)
        ranked = rank_hotels(candidates, origin, self._scoring, limit=query.limit)

        distances = [item.distance_meters for item in ranked if item.distance_meters is not None]

        return NearestResult(
            items=tuple(ranked),
            reference_point=origin,
            search_radius=max(distances, default=0.0),
            provider=result_set.provider,
            fallback_used=result_set.fallback_used,
            cached=result_set.cached,
        )

    async def _fetch(self, params: SearchParams, sort: str | None = None) -> _ResultSet:
        entry = self._find_cached(params)
        if entry is not None:
            self._metrics.record_hit()
            logger.info("Hotel %s cache hit: %s", params.kind, entry.fingerprint)
            return _ResultSet(
                items=entry.items,
                provider=entry.provider,
                fallback_used=entry.fallback_used,
                cached=True,
            )

        self._metrics.record_miss()
        result = await self._gateway.search(params)
        self._metrics.record_provider_call(result.duration_ms, result.fallback_used)

        origin = GeoPoint(lat=params.lat, lng=params.lng) if params.has_coordinates else None
        items = tuple(sort_hotels(result.items, sort, origin)) if sort else result.items
        ttl = self._fallback_ttl if result.fallback_used else self._ttl
        self._store(params, items, result.provider, ttl, result.has_more, result.fallback_used)

        return _ResultSet(
            items=items,
            provider=result.provider,
            fallback_used=result.fallback_used,
            cached=False,
        )

    def _find_cached(self, params: SearchParams):
        try:
            return self._cache.find(params)
        except CacheUnavailableError as e:
            self._metrics.record_cache_error()
            logger.warning("Cache read failed, treating as miss: %s", e)
            return None

    def _store(
        self,
        params: SearchParams,
        items: tuple[Hotel, ...],
        provider: str,
        ttl: int,
        has_more: bool,
        fallback_used: bool,
    ) -> None:
        try:
            self._cache.upsert(
                params,
                items,
                provider,
                ttl,
                has_more=has_more,
                fallback_used=fallback_used,
            )
        except CacheUnavailableError as e:
            self._metrics.record_cache_error()
            logger.warning("Cache write failed, result not cached: %s", e)

    def sweep_expired(self) -> int:
        """Remove expired cache entries.

        Returns:
            Number of entries removed
        """
        count = self._cache.sweep_expired()
        if count:
            logger.info("Cleaned %d expired hotel cache entries", count)
        return count

    def clear_cache(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        return self._cache.clear_all()

    def get_stats(self) -> dict:
        """Get cache statistics and service metrics.

        Returns:
            Dictionary with "cache" and "metrics" sections
        """
        stats = self._cache.stats()
        return {
            "cache": {
                "total_entries": stats.total_entries,
                "total_items": stats.total_items,
                "avg_access_count": stats.avg_access_count,
                "oldest_entry": stats.oldest_entry,
                "newest_entry": stats.newest_entry,
            },
            "metrics": self._metrics.to_dict(),
            "provider": self._gateway.active_provider,
            "ttl_seconds": self._ttl,
            "fallback_ttl_seconds": self._fallback_ttl,
        }

    def is_healthy(self) -> bool:
        """Check if the cache backend is reachable.

        Returns:
            True if the cache store answers its health check
        """
        return self._cache.health_check()

    async def close(self) -> None:
        await self._gateway.close()

    @property
    def scoring(self) -> ScoringConfig:
        """Get the ranking configuration."""
        return self._scoring

    @property
    def metrics(self) -> SearchMetrics:
        """Get the metrics collector (for testing)."""
        return self._metrics

    @property
    def cache_store(self) -> CacheStore:
        """Get the underlying cache store (for testing)."""
        return self._cache

    @property
    def gateway(self) -> ProviderGateway:
        """Get the underlying provider gateway (for testing)."""
        return self._gateway
