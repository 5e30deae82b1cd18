"""Shared plumbing for HTTP-based hotel providers.

Concrete adapters implement ``_search`` and are free to raise; ``search``
is the boundary where every failure is turned into an ``Err`` value with a
classified kind, so nothing escapes to the gateway as an exception.
"""

import logging

import httpx

from hotel_discovery.entities import (
    Err,
    GatewayError,
    Ok,
    ProviderPayload,
    ProviderResult,
    SearchParams,
)
from hotel_discovery.entities.provider_result import AUTH, MALFORMED, NETWORK, UNSUPPORTED

logger = logging.getLogger(__name__)


class ProviderFailure(Exception):
    """Raised inside an adapter to report a failure of a specific kind."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class HttpHotelProvider:
    """Base class for adapters talking to a JSON HTTP API.

    Subclasses set ``provider_name`` and implement ``_search``.
    """

    provider_name = "http"

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: API root, without trailing slash.
            api_key: Provider credential. Searches fail with an auth error without it.
            timeout: Request timeout in seconds.
            client: Pre-built HTTP client (tests inject one with a mock transport).
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    @property
    def name(self) -> str:
        return self.provider_name

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def search(self, params: SearchParams) -> ProviderResult:
        """Run ``_search`` and classify any failure.

        Args:
            params: The query to run upstream

        Returns:
            Ok(ProviderPayload) on success, Err(GatewayError) otherwise
        """
        try:
            return Ok(await self._search(params))
        except ProviderFailure as e:
            return self._err(e.kind, str(e))
        except httpx.HTTPStatusError as e:
            kind = AUTH if e.response.status_code in (401, 403) else NETWORK
            return self._err(kind, f"HTTP {e.response.status_code} from {e.request.url}")
        except httpx.HTTPError as e:
            return self._err(NETWORK, f"{type(e).__name__}: {e}")
        except (KeyError, TypeError, ValueError) as e:
            return self._err(MALFORMED, f"unexpected payload: {type(e).__name__}: {e}")

    async def _search(self, params: SearchParams) -> ProviderPayload:
        raise ProviderFailure(UNSUPPORTED, f"{self.name} search is not implemented")

    def _err(self, kind: str, message: str) -> ProviderResult:
        logger.debug("%s search failed (%s): %s", self.name, kind, message)
        return Err(GatewayError(provider=self.name, kind=kind, message=message))

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise ProviderFailure(AUTH, f"{self.name} API key is not configured")
        return self._api_key

    async def _get_json(
        self,
        path: str,
        params: dict | None = None,
        headers: dict | None = None,
    ) -> dict:
        response = await self.client.get(f"{self._base_url}{path}", params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def nights_between(params: SearchParams) -> int | None:
    """Number of nights of the stay, None when dates are missing."""
    if params.checkin is None or params.checkout is None:
        return None
    return max(1, (params.checkout - params.checkin).days)
