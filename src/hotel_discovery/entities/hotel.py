"""Hotel domain entity and its value objects."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GeoPoint:
    """A coordinate pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class Price:
    """Nightly price as reported by the provider."""

    amount: float
    currency: str = "USD"


@dataclass(frozen=True)
class Address:
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    formatted: str | None = None


@dataclass(frozen=True)
class Photo:
    url: str
    caption: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class Hotel:
    """A single hotel as normalized by a provider adapter.

    Instances are immutable once an adapter creates them. ``rating`` and
    ``price`` may be missing when the upstream payload lacks them; ranking
    scores such axes as worst-case instead of dropping the hotel.

    Attributes:
        id: Identifier unique within one result set
        name: Display name
        rating: Guest rating in [0, 5], None if unknown
        price: Nightly price, None if unknown
        location: Hotel coordinates, None if unknown
        distance_meters: Distance from the query point when the provider reports it
        address: Postal address
        amenities: Set of amenity labels
        photos: Ordered photos
        booking_url: Deep link for booking
        source: Provider name, "mock" for synthetic results
        external_id: Identifier in the provider's system
    """

    id: str
    name: str
    rating: float | None = None
    price: Price | None = None
    location: GeoPoint | None = None
    distance_meters: float | None = None
    address: Address = field(default_factory=Address)
    amenities: frozenset[str] = frozenset()
    photos: tuple[Photo, ...] = ()
    booking_url: str | None = None
    source: str = "unknown"
    external_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible primitives (used by cache backends)."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "price": (
                {"amount": self.price.amount, "currency": self.price.currency}
                if self.price
                else None
            ),
            "location": (
                {"lat": self.location.lat, "lng": self.location.lng}
                if self.location
                else None
            ),
            "distance_meters": self.distance_meters,
            "address": {
                "street": self.address.street,
                "city": self.address.city,
                "state": self.address.state,
                "country": self.address.country,
                "postal_code": self.address.postal_code,
                "formatted": self.address.formatted,
            },
            "amenities": sorted(self.amenities),
            "photos": [
                {
                    "url": photo.url,
                    "caption": photo.caption,
                    "width": photo.width,
                    "height": photo.height,
                }
                for photo in self.photos
            ],
            "booking_url": self.booking_url,
            "source": self.source,
            "external_id": self.external_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Hotel":
        """Inverse of ``to_dict``."""
        price = data.get("price")
        location = data.get("location")
        return cls(
            id=data["id"],
            name=data["name"],
            rating=data.get("rating"),
            price=Price(**price) if price else None,
            location=GeoPoint(**location) if location else None,
            distance_meters=data.get("distance_meters"),
            address=Address(**(data.get("address") or {})),
            amenities=frozenset(data.get("amenities") or ()),
            photos=tuple(Photo(**photo) for photo in data.get("photos") or ()),
            booking_url=data.get("booking_url"),
            source=data.get("source", "unknown"),
            external_id=data.get("external_id"),
        )
