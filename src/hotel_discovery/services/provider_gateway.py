"""Provider gateway: one configured provider, synthetic fallback.

The gateway calls exactly one provider per search (no racing, no retries
across providers). Any failure of that call - an ``Err`` result, a timeout,
or an adapter that raises despite its contract - switches to the synthetic
generator, so a well-formed query never sees a hard provider failure.
"""

import asyncio
import logging
import time
from collections.abc import Sequence

from hotel_discovery.config import settings
from hotel_discovery.entities import (
    Err,
    GatewayError,
    GatewayResult,
    Ok,
    ProviderResult,
    SearchParams,
)
from hotel_discovery.entities.provider_result import TIMEOUT, UNEXPECTED, UNSUPPORTED
from hotel_discovery.errors import ExhaustedFallbackError
from hotel_discovery.protocols import HotelProvider
from hotel_discovery.repositories import (
    AmadeusHotelProvider,
    BookingHotelProvider,
    GooglePlacesHotelProvider,
    SyntheticHotelProvider,
)

logger = logging.getLogger(__name__)


class ProviderGateway:
    """Dispatches searches to the configured provider.

    Example:
        ```python
        gateway = ProviderGateway(
            providers=[AmadeusHotelProvider(...), BookingHotelProvider(...)],
            active="booking",
            fallback=SyntheticHotelProvider(),
        )
        result = await gateway.search(params)
        if result.fallback_used:
            ...
        ```
    """

    def __init__(
        self,
        providers: Sequence[HotelProvider],
        active: str,
        fallback: HotelProvider | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the gateway.

        Args:
            providers: Available adapters, in preference order.
            active: Name of the adapter every search goes to.
            fallback: Generator used when the active adapter fails.
            timeout_seconds: Upper bound on one provider call.
        """
        self._providers: dict[str, HotelProvider] = {p.name: p for p in providers}
        self._active = active
        self._fallback = fallback or SyntheticHotelProvider()
        self._timeout = timeout_seconds

    @classmethod
    def create(
        cls,
        active: str | None = None,
        timeout_seconds: float | None = None,
    ) -> "ProviderGateway":
        """Factory method wiring every known adapter from settings.

        Args:
            active: Provider name. If None, uses settings.
            timeout_seconds: Provider call timeout. If None, uses settings.

        Returns:
            Configured ProviderGateway
        """
        timeout = timeout_seconds or settings.provider_timeout_seconds
        providers: list[HotelProvider] = [
            AmadeusHotelProvider(
                base_url=settings.amadeus_base_url,
                api_key=settings.hotels_api_key,
                api_secret=settings.hotels_api_secret,
                timeout=timeout,
            ),
            BookingHotelProvider(
                base_url=settings.booking_base_url,
                api_key=settings.hotels_api_key,
                timeout=timeout,
            ),
            GooglePlacesHotelProvider(
                base_url=settings.google_places_base_url,
                api_key=settings.hotels_api_key,
                timeout=timeout,
            ),
        ]
        return cls(
            providers=providers,
            active=active or settings.hotels_provider,
            fallback=SyntheticHotelProvider(result_count=settings.synthetic_result_count),
            timeout_seconds=timeout,
        )

    @property
    def active_provider(self) -> str:
        return self._active

    @property
    def provider_names(self) -> list[str]:
        return list(self._providers)

    async def search(self, params: SearchParams) -> GatewayResult:
        """Search the active provider, falling back to synthetic results.

        Args:
            params: The query to run

        Returns:
            GatewayResult; ``fallback_used`` tells live and synthetic apart

        Raises:
            ExhaustedFallbackError: If the synthetic generator fails too
        """
        started = time.perf_counter()
        result = await self._call_active(params)
        duration_ms = (time.perf_counter() - started) * 1000

        if isinstance(result, Ok):
            payload = result.value
            return GatewayResult(
                items=payload.items,
                total=payload.total,
                has_more=payload.has_more,
                provider=self._active,
                duration_ms=duration_ms,
            )

        error = result.error
        logger.warning("Provider search failed, falling back to synthetic data: %s", error)
        return await self._search_fallback(params, error, duration_ms)

    async def _call_active(self, params: SearchParams) -> ProviderResult:
        provider = self._providers.get(self._active)
        if provider is None:
            return Err(
                GatewayError(
                    provider=self._active,
                    kind=UNSUPPORTED,
                    message=f"Unsupported provider: {self._active}",
                )
            )

        try:
            return await asyncio.wait_for(provider.search(params), timeout=self._timeout)
        except asyncio.TimeoutError:
            return Err(
                GatewayError(
                    provider=self._active,
                    kind=TIMEOUT,
                    message=f"no response within {self._timeout:g}s",
                )
            )
        except Exception as e:
            logger.exception("Provider %s raised instead of returning an error", self._active)
            return Err(GatewayError(provider=self._active, kind=UNEXPECTED, message=str(e)))

    async def _search_fallback(
        self,
        params: SearchParams,
        error: GatewayError,
        duration_ms: float,
    ) -> GatewayResult:
        try:
            result = await self._fallback.search(params)
        except Exception as e:
            raise ExhaustedFallbackError(f"Synthetic fallback failed after {error}: {e}") from e

        if not isinstance(result, Ok) or not result.value.items:
            detail = result.error if isinstance(result, Err) else "no results"
            raise ExhaustedFallbackError(f"Synthetic fallback failed after {error}: {detail}")

        payload = result.value
        return GatewayResult(
            items=payload.items,
            total=payload.total,
            has_more=payload.has_more,
            provider=self._fallback.name,
            fallback_used=True,
            error=error,
            duration_ms=duration_ms,
        )

    async def close(self) -> None:
        """Close every adapter's network resources."""
        for provider in self._providers.values():
            await provider.close()
        await self._fallback.close()
