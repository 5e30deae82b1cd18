"""Exception taxonomy for the hotel discovery engine.

Only two of these ever reach a caller of the service layer:

- InvalidQueryError: the request itself is malformed (rejected, never faked)
- ExhaustedFallbackError: even the synthetic generator produced nothing

CacheUnavailableError is raised by cache backends and recovered by the
service as a cache miss. Provider failures are not exceptions at all: the
adapters return them as GatewayError values (see entities.provider_result).
"""


class HotelDiscoveryError(Exception):
    """Base class for all hotel discovery errors."""


class InvalidQueryError(HotelDiscoveryError, ValueError):
    """The query is missing required fields or carries out-of-range values."""


class CacheUnavailableError(HotelDiscoveryError, RuntimeError):
    """The cache backend could not be read or written."""


class ExhaustedFallbackError(HotelDiscoveryError, RuntimeError):
    """Neither the configured provider nor the synthetic generator produced results."""
