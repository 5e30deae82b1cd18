"""Query validation shared by the service and the HTTP layer.

Violations raise InvalidQueryError; they are rejected, never retried and
never answered with synthetic data.
"""

from datetime import date

from hotel_discovery.entities import SORT_OPTIONS, NearestQuery, SearchParams
from hotel_discovery.errors import InvalidQueryError

MAX_LIMIT = 100


def _check_coordinates(lat: float | None, lng: float | None) -> None:
    if (lat is None) != (lng is None):
        raise InvalidQueryError("lat and lng must be provided together")
    if lat is not None and not -90 <= lat <= 90:
        raise InvalidQueryError(f"lat must be between -90 and 90, got {lat}")
    if lng is not None and not -180 <= lng <= 180:
        raise InvalidQueryError(f"lng must be between -180 and 180, got {lng}")


def _check_dates(checkin: date | None, checkout: date | None, required: bool) -> None:
    if checkin is None and checkout is None:
        if required:
            raise InvalidQueryError("checkin and checkout are required")
        return
    if checkin is None or checkout is None:
        raise InvalidQueryError("checkin and checkout must be provided together")
    if checkout <= checkin:
        raise InvalidQueryError("checkout must be after checkin")


def _check_common(guests: int, limit: int, radius_meters: float | None) -> None:
    if guests < 1:
        raise InvalidQueryError("guests must be at least 1")
    if not 1 <= limit <= MAX_LIMIT:
        raise InvalidQueryError(f"limit must be between 1 and {MAX_LIMIT}")
    if radius_meters is not None and radius_meters <= 0:
        raise InvalidQueryError("radius_meters must be positive")


def validate_search_params(params: SearchParams) -> None:
    """Validate a search-path query.

    Raises:
        InvalidQueryError: If a location or the stay dates are missing, or
            any value is out of range
    """
    _check_coordinates(params.lat, params.lng)
    if not params.city_id and not params.has_coordinates:
        raise InvalidQueryError("either city_id or lat/lng is required")
    _check_dates(params.checkin, params.checkout, required=True)
    _check_common(params.guests, params.limit, params.radius_meters)
    if params.sort not in SORT_OPTIONS:
        raise InvalidQueryError(f"sort must be one of {list(SORT_OPTIONS)}, got {params.sort!r}")


def validate_nearest_query(query: NearestQuery) -> None:
    """Validate a nearest-path query.

    Dates are optional here (plain proximity lookups), but must come as a
    pair when given.

    Raises:
        InvalidQueryError: If coordinates are missing or any value is out of range
    """
    if query.lat is None or query.lng is None:
        raise InvalidQueryError("lat and lng are required")
    _check_coordinates(query.lat, query.lng)
    _check_dates(query.checkin, query.checkout, required=False)
    _check_common(query.guests, query.limit, query.radius_meters)
    if query.max_price is not None and query.max_price < 0:
        raise InvalidQueryError("max_price must not be negative")
    if query.min_rating is not None and not 0 <= query.min_rating <= 5:
        raise InvalidQueryError("min_rating must be between 0 and 5")
