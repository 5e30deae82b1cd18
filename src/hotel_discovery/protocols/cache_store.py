"""Cache storage protocol.

Defines the interface for any backend that can hold hotel result sets
keyed by query fingerprint with a time-to-live.

Implementations can include:
- Redis (default)
- In-process dictionary (tests, single-process deployments)
- A document database with a TTL index
"""

from typing import Protocol, runtime_checkable

from hotel_discovery.entities import CacheEntryEntity, CacheStats, Hotel, SearchParams


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for hotel result cache backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Backends raise CacheUnavailableError when
    they cannot be reached; callers treat that as a miss.

    Example:
        ```python
        from hotel_discovery.protocols import CacheStore

        store: CacheStore = RedisCacheRepository.create()
        store: CacheStore = InMemoryCacheRepository()
        ```
    """

    def find(self, params: SearchParams) -> CacheEntryEntity | None:
        """Look up the live entry for a query.

        Expired entries are treated as absent even if they have not been
        removed yet. A hit increments ``access_count`` and bumps
        ``last_accessed_at``.

        Args:
            params: The query to look up

        Returns:
            The live entry, or None on a miss
        """
        ...

    def upsert(
        self,
        params: SearchParams,
        items: list[Hotel] | tuple[Hotel, ...],
        provider: str,
        ttl_seconds: int,
        *,
        has_more: bool = False,
        fallback_used: bool = False,
    ) -> CacheEntryEntity:
        """Insert or replace the entry for a query.

        Args:
            params: The query the items answer
            items: Normalized hotels to cache
            provider: Source that produced the items ("mock" after a fallback)
            ttl_seconds: Lifetime of the entry from now
            has_more: Whether the provider has further results
            fallback_used: Whether the items are synthetic

        Returns:
            The stored entry
        """
        ...

    def delete(self, params: SearchParams) -> bool:
        """Delete the entry for a query.

        Returns:
            True if an entry was deleted, False otherwise
        """
        ...

    def sweep_expired(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        ...

    def clear_all(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def stats(self) -> CacheStats:
        """Aggregate statistics over the stored entries."""
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
