#!/usr/bin/env python3
"""
Demo script for the time-off caches.

Runs against the API configured by API_BASE_URL / API_TOKEN and shows
cache hits, forced refreshes and cache ages.
"""

import asyncio
import time

from timeoff_cache.config import settings
from timeoff_cache.logging_config import configure_logging
from timeoff_cache.services import StoreContext


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_cache_info(ctx: StoreContext) -> None:
    for store in (ctx.requests, ctx.notifications):
        for key, info in store.get_cache_info().items():
            state = "fresh" if info.fresh else "stale"
            print(f"  {store.name:>13} / {key:<14} age {info.age:>3}s  {state}")


async def demo_requests(ctx: StoreContext) -> None:
    print_section("Requests")

    for attempt in (1, 2):
        start = time.time()
        requests = await ctx.requests.fetch_requests()
        elapsed_ms = (time.time() - start) * 1000
        print(f"  Fetch #{attempt}: {len(requests)} requests in {elapsed_ms:.1f}ms")

    if ctx.requests.state.error:
        print(f"  ⚠️ {ctx.requests.state.error}")

    for request in ctx.requests.state.requests[:5]:
        print(f"  - {request.start_date} → {request.end_date}  {request.type:<14} {request.status}")


async def demo_notifications(ctx: StoreContext) -> None:
    print_section("Notifications")

    notifications = await ctx.notifications.fetch_notifications()
    print(f"  {len(notifications)} notifications, {ctx.notifications.state.unread_count} unread")

    for notification in notifications[:5]:
        marker = " " if notification.read else "•"
        print(f"  {marker} {notification.message}")


async def main() -> None:
    configure_logging(settings.log_level, settings.log_json)
    print(f"API: {settings.api_base_url}  (TTL {settings.cache_ttl:.0f}s)")

    async with StoreContext.create() as ctx:
        await demo_requests(ctx)
        await demo_notifications(ctx)

        print_section("Cache info")
        print_cache_info(ctx)

        print_section("Force refresh")
        await ctx.refresh_all()
        print_cache_info(ctx)


if __name__ == "__main__":
    asyncio.run(main())
