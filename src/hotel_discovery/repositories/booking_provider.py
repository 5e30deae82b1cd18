"""Booking.com hotel provider (via RapidAPI).

Searches by coordinates when the query has them, by destination id
otherwise. Booking.com requires stay dates, review scores come on a 0-10
scale and prices are totals for the whole stay; both are normalized.
"""

from urllib.parse import urlparse

import httpx

from hotel_discovery.entities import (
    Address,
    GeoPoint,
    Hotel,
    Photo,
    Price,
    ProviderPayload,
    SearchParams,
)
from hotel_discovery.entities.provider_result import UNSUPPORTED

from .http_provider import HttpHotelProvider, ProviderFailure, nights_between

ORDER_BY = {
    "price": "price",
    "rating": "review_score",
    "distance": "distance",
}


class BookingHotelProvider(HttpHotelProvider):
    """Booking.com implementation of the HotelProvider protocol."""

    provider_name = "booking"

    def __init__(
        self,
        base_url: str = "https://booking-com.p.rapidapi.com",
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, api_key=api_key, timeout=timeout, client=client)
        self._host = urlparse(self._base_url).netloc

    async def _search(self, params: SearchParams) -> ProviderPayload:
        headers = {
            "X-RapidAPI-Key": self._require_api_key(),
            "X-RapidAPI-Host": self._host,
        }

        nights = nights_between(params)
        if nights is None:
            raise ProviderFailure(UNSUPPORTED, "booking needs check-in and check-out dates")

        query = {
            "checkin_date": params.checkin.isoformat(),
            "checkout_date": params.checkout.isoformat(),
            "adults_number": params.guests,
            "room_number": 1,
            "order_by": ORDER_BY.get(params.sort, "popularity"),
            "filter_by_currency": "USD",
            "units": "metric",
            "locale": "en-us",
            "page_number": 0,
        }
        if params.has_coordinates:
            path = "/v1/hotels/search-by-coordinates"
            query.update({"latitude": params.lat, "longitude": params.lng})
        elif params.city_id:
            path = "/v1/hotels/search"
            query.update({"dest_id": params.city_id, "dest_type": "city"})
        else:
            raise ProviderFailure(UNSUPPORTED, "booking needs coordinates or a destination id")

        data = await self._get_json(path, params=query, headers=headers)
        records = data["result"]
        hotels = tuple(self._normalize(record, nights) for record in records)
        total = int(data.get("count", len(hotels)))
        return ProviderPayload(items=hotels, total=total, has_more=total > len(hotels))

    def _normalize(self, record: dict, nights: int) -> Hotel:
        hotel_id = str(record["hotel_id"])

        price = None
        if record.get("min_total_price") is not None:
            price = Price(
                amount=round(float(record["min_total_price"]) / nights, 2),
                currency=record.get("currencycode") or "USD",
            )

        location = None
        if record.get("latitude") is not None and record.get("longitude") is not None:
            location = GeoPoint(lat=float(record["latitude"]), lng=float(record["longitude"]))

        review_score = record.get("review_score")
        distance = record.get("distance")
        photo_url = record.get("max_photo_url") or record.get("main_photo_url")

        return Hotel(
            id=f"booking_{hotel_id}",
            name=record["hotel_name"],
            rating=round(float(review_score) / 2, 1) if review_score is not None else None,
            price=price,
            location=location,
            distance_meters=float(distance) * 1000 if distance not in (None, "") else None,
            address=Address(
                street=record.get("address"),
                city=record.get("city"),
                country=record.get("country_trans"),
                postal_code=record.get("zip"),
                formatted=", ".join(
                    part for part in (record.get("address"), record.get("city")) if part
                )
                or None,
            ),
            photos=(Photo(url=photo_url),) if photo_url else (),
            booking_url=record.get("url"),
            source=self.provider_name,
            external_id=hotel_id,
        )
