"""Ranking configuration and derived (non-persistent) ranking results."""

import math
from dataclasses import dataclass

from .hotel import GeoPoint, Hotel

METERS_PER_MILE = 1609.34


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and anchors of the composite hotel score.

    Defaults reproduce the 0.4 / 0.4 / 0.2 weighting with a $50 to $250 price
    band and a 5 km distance horizon. Ratings map from [1, 5] to [0, 1].
    """

    price_weight: float = 0.4
    rating_weight: float = 0.4
    distance_weight: float = 0.2
    price_floor: float = 50.0
    price_ceiling: float = 250.0
    rating_floor: float = 1.0
    rating_ceiling: float = 5.0
    distance_horizon_meters: float = 5000.0

    def __post_init__(self) -> None:
        """Validate weights and anchors."""
        weights = (self.price_weight, self.rating_weight, self.distance_weight)
        if any(weight < 0 for weight in weights):
            raise ValueError("Scoring weights must be non-negative")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1, got {sum(weights)}")
        if self.price_ceiling <= self.price_floor:
            raise ValueError("price_ceiling must be greater than price_floor")
        if self.rating_ceiling <= self.rating_floor:
            raise ValueError("rating_ceiling must be greater than rating_floor")
        if self.distance_horizon_meters <= 0:
            raise ValueError("distance_horizon_meters must be positive")


@dataclass(frozen=True)
class HotelScores:
    """Per-axis scores and their weighted combination, all in [0, 1]."""

    price: float
    rating: float
    distance: float
    combined: float


@dataclass(frozen=True)
class DistanceInfo:
    meters: float
    kilometers: float
    miles: float

    @classmethod
    def from_meters(cls, meters: float) -> "DistanceInfo":
        return cls(
            meters=meters,
            kilometers=round(meters / 1000, 2),
            miles=round(meters / METERS_PER_MILE, 2),
        )


@dataclass(frozen=True)
class ScoredHotel:
    """A hotel plus the values computed for one nearest query."""

    hotel: Hotel
    distance_meters: float | None
    scores: HotelScores

    @property
    def combined_score(self) -> float:
        return self.scores.combined

    @property
    def distance(self) -> DistanceInfo | None:
        if self.distance_meters is None:
            return None
        return DistanceInfo.from_meters(self.distance_meters)


@dataclass(frozen=True)
class NearestResult:
    """Ranked hotels around a reference point.

    ``search_radius`` is the largest distance among the returned hotels
    (0.0 when nothing was returned), handy for fitting map bounds.
    """

    items: tuple[ScoredHotel, ...]
    reference_point: GeoPoint
    search_radius: float
    provider: str
    fallback_used: bool = False
    cached: bool = False
