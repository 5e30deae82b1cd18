"""
Shared fixtures and fakes for the hotel discovery tests.
"""

import asyncio
import fnmatch
from datetime import date, datetime, timedelta, timezone

import pytest
import redis

from hotel_discovery.entities import (
    Err,
    GatewayError,
    GeoPoint,
    Hotel,
    Ok,
    Price,
    ProviderPayload,
    SearchParams,
)

START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class StaticProvider:
    """Provider returning a fixed hotel list and counting calls."""

    def __init__(self, hotels, name: str = "amadeus") -> None:
        self._hotels = tuple(hotels)
        self._name = name
        self.calls: list[SearchParams] = []
        self.closed = False

    @property
    def name(self) -> str:
        return self._name

    async def search(self, params):
        self.calls.append(params)
        return Ok(ProviderPayload(items=self._hotels, total=len(self._hotels)))

    async def close(self) -> None:
        self.closed = True


class FailingProvider(StaticProvider):
    """Provider reporting a failure value of the given kind."""

    def __init__(self, kind: str = "network", name: str = "amadeus") -> None:
        super().__init__((), name=name)
        self.kind = kind

    async def search(self, params):
        self.calls.append(params)
        return Err(GatewayError(provider=self.name, kind=self.kind, message="upstream down"))


class RaisingProvider(StaticProvider):
    """Provider that breaks its contract and raises."""

    def __init__(self, name: str = "amadeus") -> None:
        super().__init__((), name=name)

    async def search(self, params):
        self.calls.append(params)
        raise RuntimeError("boom")


class SlowProvider(StaticProvider):
    """Provider that never answers within a short timeout."""

    def __init__(self, delay: float = 5.0, name: str = "amadeus") -> None:
        super().__init__((), name=name)
        self.delay = delay

    async def search(self, params):
        self.calls.append(params)
        await asyncio.sleep(self.delay)
        return Ok(ProviderPayload(items=(), total=0))


class FakeRedis:
    """In-memory stand-in for the subset of redis.Redis the repository uses."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.versions: dict[str, int] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None, keepttl=False, xx=False):
        if xx and key not in self.data:
            return None
        self.data[key] = value
        self.versions[key] = self.versions.get(key, 0) + 1
        if not keepttl:
            self.ttls[key] = ex
        return True

    def delete(self, *keys):
        count = 0
        for key in keys:
            if key in self.data:
                del self.data[key]
                self.versions[key] = self.versions.get(key, 0) + 1
                self.ttls.pop(key, None)
                count += 1
        return count

    def scan_iter(self, match=None):
        for key in list(self.data):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    def pipeline(self):
        return FakePipeline(self)

    def ping(self):
        return True


class FakePipeline:
    """WATCH/MULTI/EXEC over a FakeRedis: commands run immediately until multi()."""

    def __init__(self, client: "FakeRedis") -> None:
        self._client = client
        self._watched: dict[str, int] = {}
        self._queue: list[tuple[str, tuple, dict]] = []
        self._buffering = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.reset()

    def reset(self) -> None:
        self._watched = {}
        self._queue = []
        self._buffering = False

    def watch(self, *keys):
        for key in keys:
            self._watched[key] = self._client.versions.get(key, 0)

    def multi(self):
        self._buffering = True

    def _call(self, name, *args, **kwargs):
        if self._buffering:
            self._queue.append((name, args, kwargs))
            return self
        return getattr(self._client, name)(*args, **kwargs)

    def get(self, key):
        return self._call("get", key)

    def set(self, key, value, **kwargs):
        return self._call("set", key, value, **kwargs)

    def delete(self, *keys):
        return self._call("delete", *keys)

    def execute(self):
        try:
            for key, version in self._watched.items():
                if self._client.versions.get(key, 0) != version:
                    raise redis.WatchError("Watched variable changed.")
            return [getattr(self._client, name)(*args, **kwargs) for name, args, kwargs in self._queue]
        finally:
            self.reset()


class DownRedis(FakeRedis):
    """Redis client whose server is unreachable."""

    def _fail(self, *args, **kwargs):
        raise redis.ConnectionError("Connection refused")

    get = set = delete = scan_iter = ping = pipeline = _fail


def make_hotel(
    hotel_id: str,
    price: float | None = 100.0,
    rating: float | None = 4.0,
    lat: float | None = None,
    lng: float | None = None,
    distance_meters: float | None = None,
    source: str = "amadeus",
) -> Hotel:
    return Hotel(
        id=hotel_id,
        name=f"Hotel {hotel_id}",
        rating=rating,
        price=Price(amount=price) if price is not None else None,
        location=GeoPoint(lat=lat, lng=lng) if lat is not None and lng is not None else None,
        distance_meters=distance_meters,
        source=source,
    )


@pytest.fixture
def anyio_backend() -> str:
    """Restrict anyio tests to the asyncio backend."""
    return "asyncio"


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def search_params() -> SearchParams:
    return SearchParams(
        lat=40.7128,
        lng=-74.0060,
        checkin=date(2026, 3, 10),
        checkout=date(2026, 3, 12),
        guests=2,
    )
