"""Search parameter value objects."""

from dataclasses import asdict, dataclass, replace
from datetime import date
from typing import Any

SEARCH = "search"
NEAREST = "nearest"

SORT_OPTIONS = ("price", "rating", "distance")


@dataclass(frozen=True)
class SearchParams:
    """Immutable description of one hotel query.

    Two instances are equivalent when their defined (non-None) fields are
    equal; ``to_query_dict`` is the canonical view used for fingerprinting
    and for storing the query alongside a cache entry.

    Attributes:
        city_id: Provider city code (e.g. "NYC"), alternative to coordinates
        lat: Latitude of the query point in decimal degrees
        lng: Longitude of the query point in decimal degrees
        checkin: Check-in date
        checkout: Check-out date
        guests: Number of guests
        sort: Result order ("price", "rating", "distance")
        radius_meters: Search radius around the query point
        page: 1-indexed page number
        limit: Page size (search) or maximum result count (nearest)
        kind: "search" or "nearest"; separates the two cache namespaces
    """

    city_id: str | None = None
    lat: float | None = None
    lng: float | None = None
    checkin: date | None = None
    checkout: date | None = None
    guests: int = 2
    sort: str = "price"
    radius_meters: float | None = None
    page: int = 1
    limit: int = 20
    kind: str = SEARCH

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    def to_query_dict(self) -> dict[str, Any]:
        """Return the defined fields only, with dates as ISO strings."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if isinstance(value, date):
                value = value.isoformat()
            result[key] = value
        return result

    @classmethod
    def from_query_dict(cls, data: dict[str, Any]) -> "SearchParams":
        """Rebuild params from ``to_query_dict`` output."""
        values = dict(data)
        for key in ("checkin", "checkout"):
            if isinstance(values.get(key), str):
                values[key] = date.fromisoformat(values[key])
        return cls(**values)

    def with_page(self, page: int) -> "SearchParams":
        return replace(self, page=page)


@dataclass(frozen=True)
class NearestQuery:
    """Input of the nearest-hotel ranking path.

    ``max_price`` and ``min_rating`` are post-fetch filters and are not part
    of the cache key: the same provider result set serves every filter
    combination.
    """

    lat: float
    lng: float
    radius_meters: float | None = None
    checkin: date | None = None
    checkout: date | None = None
    guests: int = 2
    limit: int = 20
    max_price: float | None = None
    min_rating: float | None = None

    def to_search_params(self, default_radius_meters: float) -> SearchParams:
        radius = self.radius_meters if self.radius_meters is not None else default_radius_meters
        return SearchParams(
            lat=self.lat,
            lng=self.lng,
            checkin=self.checkin,
            checkout=self.checkout,
            guests=self.guests,
            sort="distance",
            radius_meters=radius,
            limit=self.limit,
            kind=NEAREST,
        )
