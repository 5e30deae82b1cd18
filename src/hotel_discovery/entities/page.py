"""Pagination entities."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    items: tuple[T, ...]
    meta: PageMeta


@dataclass(frozen=True)
class HotelSearchResult:
    """One page of a hotel search plus where the data came from."""

    page: Page
    provider: str
    fallback_used: bool = False
    cached: bool = False
