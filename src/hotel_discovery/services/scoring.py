"""Score normalization and ranking for nearest-hotel queries.

Every axis maps into [0, 1] where higher is better:

- price: linear between the price floor (1.0) and ceiling (0.0)
- rating: linear between the rating floor (0.0) and ceiling (1.0)
- distance: linear from 0 m (1.0) to the distance horizon (0.0)

A missing or non-finite value scores 0 on its axis; the hotel stays in
the result set.
"""

import math
from collections.abc import Iterable, Sequence

from hotel_discovery.entities import GeoPoint, Hotel, HotelScores, Price, ScoredHotel, ScoringConfig
from hotel_discovery.utils import haversine_distance


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _known(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def price_score(price: Price | None, config: ScoringConfig) -> float:
    if price is None or not _known(price.amount):
        return 0.0
    span = config.price_ceiling - config.price_floor
    return clamp(1 - (price.amount - config.price_floor) / span)


def rating_score(rating: float | None, config: ScoringConfig) -> float:
    if not _known(rating):
        return 0.0
    span = config.rating_ceiling - config.rating_floor
    return clamp((rating - config.rating_floor) / span)


def distance_score(distance_meters: float | None, config: ScoringConfig) -> float:
    if not _known(distance_meters):
        return 0.0
    return clamp(1 - distance_meters / config.distance_horizon_meters)


def combine(price: float, rating: float, distance: float, config: ScoringConfig) -> float:
    return clamp(
        config.price_weight * price
        + config.rating_weight * rating
        + config.distance_weight * distance
    )


def resolve_distance(hotel: Hotel, origin: GeoPoint) -> float | None:
    """Provider-reported distance, else haversine from the hotel location."""
    if hotel.distance_meters is not None:
        return hotel.distance_meters
    if hotel.location is None:
        return None
    return haversine_distance(origin.lat, origin.lng, hotel.location.lat, hotel.location.lng)


def score_hotel(hotel: Hotel, origin: GeoPoint, config: ScoringConfig) -> ScoredHotel:
    distance_meters = resolve_distance(hotel, origin)
    price = price_score(hotel.price, config)
    rating = rating_score(hotel.rating, config)
    distance = distance_score(distance_meters, config)
    return ScoredHotel(
        hotel=hotel,
        distance_meters=distance_meters,
        scores=HotelScores(
            price=price,
            rating=rating,
            distance=distance,
            combined=combine(price, rating, distance, config),
        ),
    )


def rank_hotels(
    hotels: Iterable[Hotel],
    origin: GeoPoint,
    config: ScoringConfig,
    limit: int | None = None,
) -> list[ScoredHotel]:
    """Score hotels around ``origin`` and order them best first.

    The sort is stable: hotels with equal combined scores keep the order
    the provider returned them in.

    Args:
        hotels: Candidate hotels in provider order
        origin: Reference point of the query
        config: Weights and anchors
        limit: Maximum number of hotels to return, None for all

    Returns:
        Scored hotels sorted by non-increasing combined score
    """
    scored = [score_hotel(hotel, origin, config) for hotel in hotels]
    scored.sort(key=lambda item: item.combined_score, reverse=True)
    if limit is not None:
        scored = scored[: max(0, limit)]
    return scored


def apply_filters(
    hotels: Iterable[Hotel],
    max_price: float | None = None,
    min_rating: float | None = None,
) -> list[Hotel]:
    """Drop hotels whose known price or rating violates a filter.

    Hotels with an unknown price or rating are kept.
    """
    result = []
    for hotel in hotels:
        if max_price is not None and hotel.price is not None and hotel.price.amount > max_price:
            continue
        if min_rating is not None and hotel.rating is not None and hotel.rating < min_rating:
            continue
        result.append(hotel)
    return result


def _price_key(hotel: Hotel, origin: GeoPoint | None) -> tuple[bool, float]:
    return (hotel.price is None, hotel.price.amount if hotel.price else 0.0)


def _rating_key(hotel: Hotel, origin: GeoPoint | None) -> tuple[bool, float]:
    return (hotel.rating is None, -(hotel.rating or 0.0))


def _distance_key(hotel: Hotel, origin: GeoPoint | None) -> tuple[bool, float]:
    meters = resolve_distance(hotel, origin) if origin else hotel.distance_meters
    return (meters is None, meters or 0.0)


SORT_KEYS = {
    "price": _price_key,
    "rating": _rating_key,
    "distance": _distance_key,
}


def sort_hotels(
    hotels: Sequence[Hotel],
    sort: str,
    origin: GeoPoint | None = None,
) -> list[Hotel]:
    """Order a search result set; unknown values go last, ties keep provider order.

    With an ``origin``, distances the provider did not report are computed
    from the hotel location, as the nearest ranking does.
    """
    key = SORT_KEYS.get(sort)
    if key is None:
        return list(hotels)
    return sorted(hotels, key=lambda hotel: key(hotel, origin))
