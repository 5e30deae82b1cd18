"""Great-circle distance calculation."""

import math

EARTH_RADIUS_METERS = 6371000.0


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Calculate the great-circle distance between two points.

    Args:
        lat1: Latitude of the first point in decimal degrees
        lng1: Longitude of the first point in decimal degrees
        lat2: Latitude of the second point in decimal degrees
        lng2: Longitude of the second point in decimal degrees

    Returns:
        Distance in meters

    Examples:
        >>> round(haversine_distance(0, 0, 0, 1))
        111195
        >>> haversine_distance(40.7128, -74.006, 40.7128, -74.006)
        0.0
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c
