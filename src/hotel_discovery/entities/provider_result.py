"""Provider call outcomes.

Adapters never raise for upstream failures; they return ``Ok`` or ``Err``
and the gateway branches on the variant.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .hotel import Hotel

T = TypeVar("T")
E = TypeVar("E")

# GatewayError.kind values
NETWORK = "network"
AUTH = "auth"
MALFORMED = "malformed"
UNSUPPORTED = "unsupported"
TIMEOUT = "timeout"
UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


@dataclass(frozen=True)
class ProviderPayload:
    """Normalized hotels returned by one adapter call."""

    items: tuple[Hotel, ...]
    total: int
    has_more: bool = False


@dataclass(frozen=True)
class GatewayError:
    """Why a provider call failed."""

    provider: str
    kind: str
    message: str

    def __str__(self) -> str:
        return f"{self.provider} {self.kind} error: {self.message}"


ProviderResult = Union[Ok[ProviderPayload], Err[GatewayError]]


@dataclass(frozen=True)
class GatewayResult:
    """What the gateway hands back to the service.

    Attributes:
        items: Normalized hotels
        total: Total reported by the provider
        has_more: Whether the provider has further results
        provider: Name of the source that produced ``items`` ("mock" on fallback)
        fallback_used: True when the synthetic generator replaced the provider
        error: The provider failure that triggered the fallback, if any
        duration_ms: Time spent waiting on the configured provider
    """

    items: tuple[Hotel, ...]
    total: int
    has_more: bool
    provider: str
    fallback_used: bool = False
    error: GatewayError | None = None
    duration_ms: float = 0.0
