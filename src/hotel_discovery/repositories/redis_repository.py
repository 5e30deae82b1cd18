"""Redis implementation of CacheStore.

Each cached result set is one JSON document stored under
``{prefix}:{fingerprint}``. It's the default implementation and satisfies
the CacheStore protocol.
"""

import json
import logging
from collections.abc import Iterator

import redis

from hotel_discovery.config import get_redis_client, settings
from hotel_discovery.entities import CacheEntryEntity, CacheStats, Hotel, SearchParams
from hotel_discovery.errors import CacheUnavailableError
from hotel_discovery.utils import Clock, fingerprint, utc_now

logger = logging.getLogger(__name__)


class RedisCacheRepository:
    """Redis implementation using one string key per fingerprint.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Uses plain Redis with:
    - A single SET per write, so readers never observe a partial entry
    - Native key expiry as the physical reclaim mechanism
    - ``expires_at`` checked against the injected clock for lazy expiry
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Namespace for cache keys.
            clock: Source of the current time. Defaults to UTC wall clock.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._clock = clock or utc_now

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        clock: Clock | None = None,
    ) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            key_prefix: Redis key namespace. If None, uses settings.
            clock: Time source. If None, uses the UTC wall clock.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(key_prefix=key_prefix, clock=clock)

    def _key(self, fp: str) -> str:
        return f"{self._prefix}:{fp}"

    def _load(self, key: str, client=None) -> CacheEntryEntity | None:
        client = client or self._client
        raw = client.get(key)
        if raw is None:
            return None
        try:
            return CacheEntryEntity.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)
            client.delete(key)
            return None

    def _iter_keys(self) -> Iterator[str]:
        return self._client.scan_iter(match=f"{self._prefix}:*")

    def find(self, params: SearchParams) -> CacheEntryEntity | None:
        """Find the live entry for a query.

        Args:
            params: The query to look up

        Returns:
            The live entry with updated access statistics, or None
        """
        key = self._key(fingerprint(params))
        now = self._clock()
        try:
            with self._client.pipeline() as pipe:
                pipe.watch(key)
                entry = self._load(key, client=pipe)
                if entry is None or not entry.is_live(now):
                    return None

                entry = entry.touched(now)
                pipe.multi()
                # KEEPTTL: statistics updates must not extend the entry's life
                pipe.set(key, json.dumps(entry.to_dict()), keepttl=True, xx=True)
                try:
                    pipe.execute()
                except redis.WatchError:
                    # A concurrent upsert replaced the entry; serve it without
                    # recording this read
                    entry = self._load(key)
                    if entry is None or not entry.is_live(now):
                        return None
            return entry
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis read failed: {e}") from e

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
            ttl_seconds: Lifetime of the entry in seconds
            has_more: Whether the provider has further results
            fallback_used: Whether the items are synthetic

        Returns:
            The stored entry
        """
        fp = fingerprint(params)
        key = self._key(fp)
        now = self._clock()
        try:
            entry = CacheEntryEntity.upserted(
                self._load(key),
                fingerprint=fp,
                search_params=params.to_query_dict(),
                items=tuple(items),
                provider=provider,
                now=now,
                ttl_seconds=ttl_seconds,
                has_more=has_more,
                fallback_used=fallback_used,
            )
            self._client.set(key, json.dumps(entry.to_dict()), ex=max(1, int(ttl_seconds)))
            return entry
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis write failed: {e}") from e

    def delete(self, params: SearchParams) -> bool:
        """Delete the entry for a query.

        Returns:
            True if deleted, False otherwise
        """
        try:
            result: int = self._client.delete(self._key(fingerprint(params)))  # type: ignore[assignment]
            return result > 0
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis delete failed: {e}") from e

    def sweep_expired(self) -> int:
        """Delete entries whose ``expires_at`` has passed.

        Redis key expiry normally reclaims them first; the sweep catches
        entries written by clients whose clock disagrees with the server.

        Returns:
            Number of entries deleted
        """
        now = self._clock()
        count = 0
        try:
            for key in self._iter_keys():
                raw = self._client.get(key)
                if raw is None:
                    continue
                try:
                    entry = CacheEntryEntity.from_dict(json.loads(raw))
                except (ValueError, KeyError, TypeError):
                    entry = None
                if entry is None or not entry.is_live(now):
                    count += self._client.delete(key)  # type: ignore[operator]
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis sweep failed: {e}") from e
        return count

    def clear_all(self) -> int:
        """Clear all entries under the prefix.

        Returns:
            Number of entries deleted
        """
        count = 0
        try:
            for key in self._iter_keys():
                count += self._client.delete(key)  # type: ignore[operator]
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis clear failed: {e}") from e
        return count

    def stats(self) -> CacheStats:
        """Aggregate statistics over all stored entries.

        Returns:
            CacheStats over every readable entry under the prefix
        """
        entries = []
        try:
            for key in self._iter_keys():
                entry = self._load(key)
                if entry is not None:
                    entries.append(entry)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis stats failed: {e}") from e
        return CacheStats.from_entries(entries)

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
