#!/usr/bin/env python3
"""
Demo script for hotel discovery.

Runs the search and nearest paths against an in-memory cache. The configured
provider has no credentials here, so every query shows the synthetic
fallback at work.
"""

import asyncio
import time
from datetime import date, timedelta

from hotel_discovery.entities import NearestQuery, SearchParams
from hotel_discovery.repositories import InMemoryCacheRepository
from hotel_discovery.services import HotelSearchService, ProviderGateway

PARIS = (48.8566, 2.3522)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_service() -> HotelSearchService:
    return HotelSearchService.create(
        cache_store=InMemoryCacheRepository(),
        gateway=ProviderGateway.create(),
    )


async def demo_search(service: HotelSearchService) -> None:
    """Demonstrate paged search and cache hits."""
    print_section("Paged Search")

    checkin = date.today() + timedelta(days=14)
    params = SearchParams(
        lat=PARIS[0],
        lng=PARIS[1],
        checkin=checkin,
        checkout=checkin + timedelta(days=2),
        sort="price",
        limit=5,
    )

    for page in (1, 2, 4):
        start = time.perf_counter()
        result = await service.search_hotels(params.with_page(page))
        duration = (time.perf_counter() - start) * 1000
        meta = result.page.meta

        print(f"\n  Page {meta.page}/{meta.total_pages} ({meta.total} hotels, {duration:.2f}ms)")
        print(f"  Provider: {result.provider}  fallback: {result.fallback_used}  cached: {result.cached}")
        for hotel in result.page.items:
            print(f"    {hotel.name:<28} ${hotel.price.amount:>6.0f}  {hotel.rating}★")
        if not result.page.items:
            print("    (empty page)")


async def demo_nearest(service: HotelSearchService) -> None:
    """Demonstrate nearest-hotel ranking with filters."""
    print_section("Nearest Hotels")

    queries = [
        NearestQuery(lat=PARIS[0], lng=PARIS[1], limit=5),
        NearestQuery(lat=PARIS[0], lng=PARIS[1], limit=5, max_price=120, min_rating=4.0),
    ]

    for query in queries:
        result = await service.find_nearest_hotels(query)
        print(f"\n  max_price={query.max_price} min_rating={query.min_rating} cached={result.cached}")
        print(f"  {'Hotel':<28} {'Score':>6} {'Price':>6} {'Rating':>6} {'Distance':>9}")
        print("  " + "-" * 60)
        for item in result.items:
            hotel = item.hotel
            print(
                f"  {hotel.name:<28} "
                f"{item.combined_score:>6.3f} "
                f"{hotel.price.amount:>6.0f} "
                f"{hotel.rating:>6.1f} "
                f"{item.distance.meters:>8.0f}m"
            )
        print(f"  Search radius: {result.search_radius:.0f}m")


def demo_stats(service: HotelSearchService) -> None:
    """Show cache statistics and service metrics."""
    print_section("Cache Statistics")

    stats = service.get_stats()
    for key, value in stats["cache"].items():
        print(f"  {key:<20} {value}")
    print()
    for key, value in stats["metrics"].items():
        print(f"  {key:<20} {value}")


async def main() -> None:
    """Run all demos."""
    print("\n🏨 Hotel Discovery Demo")
    print("=" * 70)

    service = build_service()
    try:
        await demo_search(service)
        await demo_nearest(service)
        demo_stats(service)

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
