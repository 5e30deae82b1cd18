import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

from hotel_discovery.entities import ScoringConfig

load_dotenv()

PROVIDER_NAMES = ("amadeus", "booking", "google")
CACHE_BACKENDS = ("redis", "memory")


def _optional(name: str) -> str | None:
    return os.getenv(name) or None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = _optional("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "hotels_cache")
    cache_ttl_hours: float = float(os.getenv("CACHE_TTL_HOURS", "1"))
    cache_fallback_ttl_seconds: int = int(os.getenv("CACHE_FALLBACK_TTL_SECONDS", "300"))
    cache_sweep_interval_seconds: int = int(os.getenv("CACHE_SWEEP_INTERVAL_SECONDS", "600"))

    # Providers
    hotels_provider: str = os.getenv("HOTELS_API_PROVIDER", "amadeus")
    hotels_api_key: str | None = _optional("HOTELS_API_KEY")
    hotels_api_secret: str | None = _optional("HOTELS_API_SECRET")
    amadeus_base_url: str = os.getenv("AMADEUS_BASE_URL", "https://test.api.amadeus.com")
    booking_base_url: str = os.getenv("BOOKING_BASE_URL", "https://booking-com.p.rapidapi.com")
    google_places_base_url: str = os.getenv(
        "GOOGLE_PLACES_BASE_URL", "https://maps.googleapis.com/maps/api"
    )
    provider_timeout_seconds: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30"))
    synthetic_result_count: int = int(os.getenv("SYNTHETIC_RESULT_COUNT", "20"))

    # Ranking
    default_radius_meters: float = float(os.getenv("DEFAULT_RADIUS_METERS", "5000"))
    score_price_weight: float = float(os.getenv("SCORE_PRICE_WEIGHT", "0.4"))
    score_rating_weight: float = float(os.getenv("SCORE_RATING_WEIGHT", "0.4"))
    score_distance_weight: float = float(os.getenv("SCORE_DISTANCE_WEIGHT", "0.2"))
    score_price_floor: float = float(os.getenv("SCORE_PRICE_FLOOR", "50"))
    score_price_ceiling: float = float(os.getenv("SCORE_PRICE_CEILING", "250"))
    score_distance_horizon_meters: float = float(
        os.getenv("SCORE_DISTANCE_HORIZON_METERS", "5000")
    )

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def cache_ttl_seconds(self) -> int:
        """TTL applied to live-provider results."""
        return int(self.cache_ttl_hours * 3600)

    @property
    def scoring(self) -> ScoringConfig:
        """Build the ranking configuration from the score settings.

        Returns:
            ScoringConfig with the configured weights and anchors
        """
        return ScoringConfig(
            price_weight=self.score_price_weight,
            rating_weight=self.score_rating_weight,
            distance_weight=self.score_distance_weight,
            price_floor=self.score_price_floor,
            price_ceiling=self.score_price_ceiling,
            distance_horizon_meters=self.score_distance_horizon_meters,
        )

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend}"
            )

        if self.cache_ttl_hours <= 0:
            raise ValueError("CACHE_TTL_HOURS must be positive")

        if self.cache_fallback_ttl_seconds <= 0:
            raise ValueError("CACHE_FALLBACK_TTL_SECONDS must be positive")

        if self.cache_sweep_interval_seconds < 0:
            raise ValueError("CACHE_SWEEP_INTERVAL_SECONDS must be 0 (disabled) or positive")

        if self.provider_timeout_seconds <= 0:
            raise ValueError("PROVIDER_TIMEOUT_SECONDS must be positive")

        if self.default_radius_meters <= 0:
            raise ValueError("DEFAULT_RADIUS_METERS must be positive")

        if self.synthetic_result_count < 1:
            raise ValueError("SYNTHETIC_RESULT_COUNT must be at least 1")

        # Fails fast on inconsistent weights or anchors
        _ = self.scoring


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
