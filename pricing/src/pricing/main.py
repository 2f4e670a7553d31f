"""
Command line entry point for the price cache.

Builds a cache from the environment and runs a few rounds of lookups so
the hit/miss behaviour can be observed.  Within a round all products are
looked up concurrently; later rounds should be served from the cache for
every product that has a price.

    python -m pricing.main --delay 0.5 accord civic tesla
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from typing import List, Optional, Sequence, Tuple

from prometheus_client import REGISTRY

from . import build_price_cache
from .config import PriceCacheSettings
from .services.event_bus import EventBus
from .services.metrics import PriceCacheMetrics, start_metrics_server
from .services.price_cache import PRICE_UPDATE_EVENT, PriceCache

logger = logging.getLogger(__name__)

LookupResult = Tuple[int, str, Optional[float], bool]


async def run_lookups(cache: PriceCache, products: Sequence[str], rounds: int = 2) -> List[LookupResult]:
    """Look up ``products`` concurrently, ``rounds`` times.

    Returns one ``(round, product, price, hit)`` tuple per lookup, where
    ``hit`` tells whether the product was cached before the lookup.
    """
    results: List[LookupResult] = []
    for round_no in range(1, rounds + 1):
        hits = [product in cache for product in products]
        prices = await asyncio.gather(*(cache.get_price(product) for product in products))
        for product, price, hit in zip(products, prices, hits):
            logger.info("round=%d product=%s price=%s hit=%s", round_no, product, price, hit)
            results.append((round_no, product, price, hit))
    return results


async def log_price_updates(event_bus: EventBus) -> None:
    """Log every price the cache stores; runs until cancelled."""
    async for event in event_bus.subscribe(PRICE_UPDATE_EVENT):
        logger.info("price_update product=%s price=%.2f", event["product_id"], event["price"])


async def run(cache: PriceCache, event_bus: EventBus, products: Sequence[str], rounds: int) -> List[LookupResult]:
    """Run the lookup rounds with a price_update logger attached to ``event_bus``."""
    consumer = asyncio.create_task(log_price_updates(event_bus))
    try:
        results = await run_lookups(cache, products, rounds)
        await event_bus.join(PRICE_UPDATE_EVENT)
    finally:
        consumer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await consumer
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Look up product prices through the price cache.")
    parser.add_argument("products", nargs="*", default=["accord", "civic", "tesla"], help="Products to price.")
    parser.add_argument("--delay", type=float, default=None, help="Override PRICE_SOURCE_DELAY (seconds).")
    parser.add_argument("--rounds", type=int, default=2, help="Number of lookup rounds.")
    args = parser.parse_args(argv)

    settings = PriceCacheSettings.from_env()
    if args.delay is not None:
        settings = settings.model_copy(update={"source_delay": args.delay})
    logging.basicConfig(level=settings.log_level)

    metrics = None
    if settings.metrics_enable:
        metrics = PriceCacheMetrics(registry=REGISTRY)
        start_metrics_server(settings.prometheus_port)
    event_bus = EventBus()
    cache = build_price_cache(settings, event_bus=event_bus, metrics=metrics)

    results = asyncio.run(run(cache, event_bus, args.products, args.rounds))
    for round_no, product, price, hit in results:
        shown = "n/a" if price is None else f"{price:.2f}"
        print(f"[{round_no}] {product}: {shown} ({'hit' if hit else 'miss'})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
