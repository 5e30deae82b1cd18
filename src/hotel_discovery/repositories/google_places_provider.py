"""Google Places hotel provider.

Uses the Places Nearby Search endpoint restricted to ``type=lodging``.
Places has no room prices, so every hotel comes back without one and is
ranked with the worst-case price score.
"""

import httpx

from hotel_discovery.entities import Address, GeoPoint, Hotel, Photo, ProviderPayload, SearchParams
from hotel_discovery.entities.provider_result import AUTH, MALFORMED, UNSUPPORTED

from .http_provider import HttpHotelProvider, ProviderFailure

MAX_RADIUS_METERS = 50000

AUTH_STATUSES = {"REQUEST_DENIED", "OVER_QUERY_LIMIT"}


class GooglePlacesHotelProvider(HttpHotelProvider):
    """Google Places implementation of the HotelProvider protocol."""

    provider_name = "google"

    def __init__(
        self,
        base_url: str = "https://maps.googleapis.com/maps/api",
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, api_key=api_key, timeout=timeout, client=client)

    async def _search(self, params: SearchParams) -> ProviderPayload:
        api_key = self._require_api_key()
        if not params.has_coordinates:
            raise ProviderFailure(UNSUPPORTED, "google places needs coordinates")

        radius = min(int(params.radius_meters or 5000), MAX_RADIUS_METERS)
        data = await self._get_json(
            "/place/nearbysearch/json",
            params={
                "location": f"{params.lat},{params.lng}",
                "radius": radius,
                "type": "lodging",
                "key": api_key,
            },
        )

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return ProviderPayload(items=(), total=0, has_more=False)
        if status in AUTH_STATUSES:
            raise ProviderFailure(AUTH, f"{status}: {data.get('error_message', '')}".strip())
        if status != "OK":
            raise ProviderFailure(MALFORMED, f"unexpected status {status!r}")

        hotels = tuple(self._normalize(record) for record in data["results"])
        return ProviderPayload(
            items=hotels,
            total=len(hotels),
            has_more=bool(data.get("next_page_token")),
        )

    def _normalize(self, record: dict) -> Hotel:
        place_id = record["place_id"]
        location = record["geometry"]["location"]
        rating = record.get("rating")

        photos = tuple(
            Photo(
                url=(
                    f"{self._base_url}/place/photo?maxwidth=800"
                    f"&photo_reference={photo['photo_reference']}"
                ),
                width=photo.get("width"),
                height=photo.get("height"),
            )
            for photo in record.get("photos") or ()
            if photo.get("photo_reference")
        )

        return Hotel(
            id=f"google_{place_id}",
            name=record["name"],
            rating=float(rating) if rating is not None else None,
            location=GeoPoint(lat=float(location["lat"]), lng=float(location["lng"])),
            address=Address(formatted=record.get("vicinity")),
            photos=photos,
            booking_url=f"https://www.google.com/maps/place/?q=place_id:{place_id}",
            source=self.provider_name,
            external_id=place_id,
        )
