import threading
from dataclasses import dataclass, field


@dataclass
class SearchMetrics:
    """Track cache and provider metrics for hotel queries."""

    total_queries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    cache_errors: int = 0
    provider_calls: int = 0
    fallbacks: int = 0
    total_provider_time_ms: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_queries == 0:
            return 0.0
        return self.cache_hits / self.total_queries

    @property
    def avg_provider_time_ms(self) -> float:
        """Calculate average provider call time."""
        if self.provider_calls == 0:
            return 0.0
        return self.total_provider_time_ms / self.provider_calls

    def record_hit(self) -> None:
        """Record a cache hit."""
        with self._lock:
            self.total_queries += 1
            self.cache_hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        with self._lock:
            self.total_queries += 1
            self.cache_misses += 1

    def record_cache_error(self) -> None:
        """Record a cache backend failure (read or write)."""
        with self._lock:
            self.cache_errors += 1

    def record_provider_call(self, duration_ms: float, fallback_used: bool) -> None:
        """Record one gateway call."""
        with self._lock:
            self.provider_calls += 1
            self.total_provider_time_ms += duration_ms
            if fallback_used:
                self.fallbacks += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_queries": self.total_queries,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_errors": self.cache_errors,
            "hit_rate": self.hit_rate,
            "provider_calls": self.provider_calls,
            "fallbacks": self.fallbacks,
            "avg_provider_time_ms": self.avg_provider_time_ms,
        }
