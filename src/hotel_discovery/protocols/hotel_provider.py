"""Hotel provider protocol.

Defines the interface for any upstream hotel data source. Each adapter
owns its own request/response shape and normalizes into Hotel entities.

Implementations can include:
- Amadeus Hotel Search API
- Booking.com via RapidAPI
- Google Places Nearby Search
- The synthetic generator used as fallback
"""

from typing import Protocol, runtime_checkable

from hotel_discovery.entities import ProviderResult, SearchParams


@runtime_checkable
class HotelProvider(Protocol):
    """Protocol for hotel search adapters.

    Adapters report failures as ``Err(GatewayError(...))`` values instead of
    raising, so the gateway can pick the fallback path explicitly.
    """

    @property
    def name(self) -> str:
        """Return the provider identifier (e.g. "amadeus")."""
        ...

    async def search(self, params: SearchParams) -> ProviderResult:
        """Search hotels for a query.

        Args:
            params: The query to run upstream

        Returns:
            Ok(ProviderPayload) on success, Err(GatewayError) on failure
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
