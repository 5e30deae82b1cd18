"""Cache entry domain entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any

from .hotel import Hotel


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for one cached hotel result set.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        fingerprint: Canonical key of the query (unique per live entry)
        search_params: The defined query fields the entry was stored under
        items: The cached hotels, owned exclusively by this entry
        provider: Source that produced the items ("mock" after a fallback)
        total_results: Number of cached items
        has_more: Whether the provider reported further results
        fallback_used: True when the items came from the synthetic generator
        expires_at: The entry is absent once this moment is reached
        created_at: First insertion of this fingerprint
        last_accessed_at: Last read or write
        access_count: Reads plus writes since creation
    """

    fingerprint: str
    search_params: dict[str, Any]
    items: tuple[Hotel, ...]
    provider: str
    total_results: int
    has_more: bool
    fallback_used: bool
    expires_at: datetime
    created_at: datetime
    last_accessed_at: datetime
    access_count: int = 0

    def is_live(self, now: datetime) -> bool:
        return self.expires_at > now

    def touched(self, now: datetime) -> "CacheEntryEntity":
        """Copy with the access statistics of one more read."""
        return replace(self, last_accessed_at=now, access_count=self.access_count + 1)

    @classmethod
    def upserted(
        cls,
        previous: "CacheEntryEntity | None",
        fingerprint: str,
        search_params: dict[str, Any],
        items: tuple[Hotel, ...],
        provider: str,
        now: datetime,
        ttl_seconds: int,
        has_more: bool = False,
        fallback_used: bool = False,
    ) -> "CacheEntryEntity":
        """Build the entry that replaces ``previous`` for the same fingerprint.

        A live predecessor keeps its ``created_at`` and ``access_count``;
        an expired one is replaced as if it had never existed.
        """
        if previous is not None and not previous.is_live(now):
            previous = None

        return cls(
            fingerprint=fingerprint,
            search_params=search_params,
            items=items,
            provider=provider,
            total_results=len(items),
            has_more=has_more,
            fallback_used=fallback_used,
            expires_at=now + timedelta(seconds=ttl_seconds),
            created_at=previous.created_at if previous else now,
            last_accessed_at=now,
            access_count=(previous.access_count if previous else 0) + 1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fingerprint": self.fingerprint,
            "search_params": self.search_params,
            "items": [item.to_dict() for item in self.items],
            "provider": self.provider,
            "total_results": self.total_results,
            "has_more": self.has_more,
            "fallback_used": self.fallback_used,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat(),
            "last_accessed_at": self.last_accessed_at.isoformat(),
            "access_count": self.access_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheEntryEntity":
        return cls(
            fingerprint=data["fingerprint"],
            search_params=data.get("search_params") or {},
            items=tuple(Hotel.from_dict(item) for item in data.get("items") or ()),
            provider=data["provider"],
            total_results=int(data.get("total_results", 0)),
            has_more=bool(data.get("has_more", False)),
            fallback_used=bool(data.get("fallback_used", False)),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            last_accessed_at=datetime.fromisoformat(data["last_accessed_at"]),
            access_count=int(data.get("access_count", 0)),
        )


@dataclass(frozen=True)
class CacheStats:
    """Aggregate diagnostic view over a cache store."""

    total_entries: int = 0
    total_items: int = 0
    avg_access_count: float = 0.0
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None

    @classmethod
    def from_entries(cls, entries: list[CacheEntryEntity]) -> "CacheStats":
        if not entries:
            return cls()
        created = [entry.created_at for entry in entries]
        return cls(
            total_entries=len(entries),
            total_items=sum(len(entry.items) for entry in entries),
            avg_access_count=sum(entry.access_count for entry in entries) / len(entries),
            oldest_entry=min(created),
            newest_entry=max(created),
        )
