"""Amadeus Self-Service hotel provider.

Two-step search against the Amadeus APIs:

1. Hotel List API (by geocode, or by IATA city code) for names, locations
   and distances
2. Hotel Search API (offers) for prices, only when the stay dates are known

Authentication uses the OAuth2 client-credentials flow; the access token
is cached until shortly before it expires.
"""

import math
import time

import httpx

from hotel_discovery.entities import Address, GeoPoint, Hotel, Price, ProviderPayload, SearchParams
from hotel_discovery.entities.provider_result import AUTH, UNSUPPORTED
from hotel_discovery.entities.ranking import METERS_PER_MILE

from .http_provider import HttpHotelProvider, ProviderFailure, nights_between

# Hotel Search accepts a bounded list of hotel ids per request
MAX_OFFER_HOTELS = 50

TOKEN_EXPIRY_MARGIN_SECONDS = 60


class AmadeusHotelProvider(HttpHotelProvider):
    """Amadeus implementation of the HotelProvider protocol.

    Example:
        ```python
        provider = AmadeusHotelProvider(
            api_key="client-id",
            api_secret="client-secret",
        )
        result = await provider.search(params)
        ```
    """

    provider_name = "amadeus"

    def __init__(
        self,
        base_url: str = "https://test.api.amadeus.com",
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, api_key=api_key, timeout=timeout, client=client)
        self._api_secret = api_secret
        self._token: str | None = None
        self._token_expires_at = 0.0

    async def _access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        client_id = self._require_api_key()
        if not self._api_secret:
            raise ProviderFailure(AUTH, "amadeus API secret is not configured")

        response = await self.client.post(
            f"{self._base_url}/v1/security/oauth2/token",
            data={
                "grant_type": "client_credentials",
                "client_id": client_id,
                "client_secret": self._api_secret,
            },
        )
        response.raise_for_status()
        data = response.json()

        self._token = data["access_token"]
        expires_in = float(data.get("expires_in", 1799))
        self._token_expires_at = time.monotonic() + max(0.0, expires_in - TOKEN_EXPIRY_MARGIN_SECONDS)
        return self._token

    async def _search(self, params: SearchParams) -> ProviderPayload:
        token = await self._access_token()
        headers = {"Authorization": f"Bearer {token}"}

        if params.has_coordinates:
            radius_km = max(1, math.ceil((params.radius_meters or 5000) / 1000))
            listing = await self._get_json(
                "/v1/reference-data/locations/hotels/by-geocode",
                params={
                    "latitude": params.lat,
                    "longitude": params.lng,
                    "radius": radius_km,
                    "radiusUnit": "KM",
                },
                headers=headers,
            )
        elif params.city_id:
            listing = await self._get_json(
                "/v1/reference-data/locations/hotels/by-city",
                params={"cityCode": params.city_id},
                headers=headers,
            )
        else:
            raise ProviderFailure(UNSUPPORTED, "amadeus needs coordinates or a city code")

        records = listing["data"]
        selected = records[:MAX_OFFER_HOTELS]
        prices = await self._fetch_prices(selected, params, headers)

        hotels = tuple(self._normalize(record, prices.get(record["hotelId"])) for record in selected)
        return ProviderPayload(items=hotels, total=len(records), has_more=len(records) > len(hotels))

    async def _fetch_prices(
        self,
        records: list[dict],
        params: SearchParams,
        headers: dict,
    ) -> dict[str, Price]:
        nights = nights_between(params)
        if nights is None or not records:
            return {}

        offers = await self._get_json(
            "/v3/shopping/hotel-offers",
            params={
                "hotelIds": ",".join(record["hotelId"] for record in records),
                "adults": params.guests,
                "checkInDate": params.checkin.isoformat(),
                "checkOutDate": params.checkout.isoformat(),
                "bestRateOnly": "true",
            },
            headers=headers,
        )

        prices: dict[str, Price] = {}
        for item in offers.get("data", []):
            hotel_offers = item.get("offers") or []
            if not hotel_offers:
                continue
            price = hotel_offers[0]["price"]
            prices[item["hotel"]["hotelId"]] = Price(
                amount=round(float(price["total"]) / nights, 2),
                currency=price.get("currency", "USD"),
            )
        return prices

    def _normalize(self, record: dict, price: Price | None) -> Hotel:
        geo = record.get("geoCode") or {}
        location = None
        if "latitude" in geo and "longitude" in geo:
            location = GeoPoint(lat=float(geo["latitude"]), lng=float(geo["longitude"]))

        distance_meters = None
        distance = record.get("distance")
        if distance and distance.get("value") is not None:
            factor = METERS_PER_MILE if distance.get("unit") == "MI" else 1000.0
            distance_meters = float(distance["value"]) * factor

        address = record.get("address") or {}
        lines = address.get("lines") or []
        rating = record.get("rating")

        return Hotel(
            id=f"amadeus_{record['hotelId']}",
            name=str(record["name"]).title(),
            rating=float(rating) if rating is not None else None,
            price=price,
            location=location,
            distance_meters=distance_meters,
            address=Address(
                street=lines[0] if lines else None,
                city=address.get("cityName"),
                country=address.get("countryCode"),
                postal_code=address.get("postalCode"),
                formatted=", ".join(lines) if lines else None,
            ),
            source=self.provider_name,
            external_id=record["hotelId"],
        )
