"""In-process implementation of CacheStore.

Keeps entries in a dictionary keyed by fingerprint. Useful for tests,
single-process deployments and per-tenant caches that must not share a
Redis namespace.
"""

import logging
import threading

from hotel_discovery.entities import CacheEntryEntity, CacheStats, Hotel, SearchParams
from hotel_discovery.utils import Clock, fingerprint, utc_now

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Dictionary-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing. Entries are immutable and replaced whole under a lock, so a
    reader sees either the previous entry or the new one, never a mix.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize an empty store.

        Args:
            clock: Source of the current time. Defaults to UTC wall clock.
        """
        self._clock = clock or utc_now
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    def find(self, params: SearchParams) -> CacheEntryEntity | None:
        key = fingerprint(params)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not entry.is_live(now):
                return None
            entry = entry.touched(now)
            self._entries[key] = entry
        return entry

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
        key = fingerprint(params)
        now = self._clock()
        with self._lock:
            entry = CacheEntryEntity.upserted(
                self._entries.get(key),
                fingerprint=key,
                search_params=params.to_query_dict(),
                items=tuple(items),
                provider=provider,
                now=now,
                ttl_seconds=ttl_seconds,
                has_more=has_more,
                fallback_used=fallback_used,
            )
            self._entries[key] = entry
        return entry

    def delete(self, params: SearchParams) -> bool:
        with self._lock:
            return self._entries.pop(fingerprint(params), None) is not None

    def sweep_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if not entry.is_live(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Swept %d expired in-memory cache entries", len(expired))
        return len(expired)

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def stats(self) -> CacheStats:
        with self._lock:
            entries = list(self._entries.values())
        return CacheStats.from_entries(entries)

    def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)
