"""Pure helpers: geodistance, fingerprints, pagination and the clock."""

from .clock import Clock, utc_now
from .fingerprint import fingerprint
from .geo import EARTH_RADIUS_METERS, haversine_distance
from .pagination import paginate

__all__ = [
    "Clock",
    "EARTH_RADIUS_METERS",
    "fingerprint",
    "haversine_distance",
    "paginate",
    "utc_now",
]
