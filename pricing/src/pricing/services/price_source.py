"""
Price sources consulted by the price cache on a miss.

A source is anything with an ``async fetch_price(product_id)`` coroutine
that eventually resolves to a price, or to ``None`` when it has no price
for the product.  Unknown products are not an error.

``StaticPriceSource`` stands in for a real pricing backend: it serves a
fixed catalogue after a simulated network delay.

Usage:

    source = StaticPriceSource(delay=2.0)
    price = await source.fetch_price("accord")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_PRICES: Dict[str, float] = {
    "accord": 40000.0,
    "civic": 32000.0,
}


class PriceSource(Protocol):
    """Interface for asynchronous, latency-bearing price lookups."""

    async def fetch_price(self, product_id: str) -> Optional[float]:
        """Return the price of ``product_id``, or ``None`` if unknown."""
        ...


class StaticPriceSource:
    """Serve prices from a fixed mapping after a fixed delay."""

    def __init__(self, prices: Optional[Mapping[str, float]] = None, delay: float = 2.0) -> None:
        """Initialize the source.

        Args:
            prices: Known product prices.  Defaults to ``DEFAULT_PRICES``.
            delay: Seconds to sleep before answering each request.
        """
        self.prices: Dict[str, float] = dict(DEFAULT_PRICES if prices is None else prices)
        self.delay = delay

    async def fetch_price(self, product_id: str) -> Optional[float]:
        logger.debug("Fetching price for %s (delay=%.2fs)", product_id, self.delay)
        await asyncio.sleep(self.delay)
        price = self.prices.get(product_id)
        if price is None:
            logger.debug("No price known for %s", product_id)
        return price
