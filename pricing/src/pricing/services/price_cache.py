"""
Price cache service sitting in front of a slow price source.

Lookups for a product that has already been priced are answered from
memory without suspending.  On a miss the cache awaits the configured
``PriceSource`` and stores the result, but only when it is a strictly
positive price; a missing or zero price is handed back to the caller and
the next lookup asks the source again.

With ``single_flight`` enabled (the default) concurrent misses for the
same product share one pending fetch, so the source is called once no
matter how many coroutines are waiting.  Disabling it restores the naive
behaviour where every concurrent miss calls the source and the last
write wins.

The cache does not enforce any expiry; a cached price is served for the
lifetime of the cache instance.

Usage:

    cache = PriceCache(StaticPriceSource())
    price = await cache.get_price("accord")
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from ..models import CacheEntry
from .metrics import PriceCacheMetrics
from .price_source import PriceSource, StaticPriceSource

logger = logging.getLogger(__name__)

PRICE_UPDATE_EVENT = "price_update"


def _coerce_price(value: Any) -> Optional[float]:
    """Return ``value`` as a finite, non-negative float or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


class PriceCache:
    """Cache product prices fetched from a ``PriceSource``.

    Prices are stored as ``CacheEntry`` models keyed by product ID.  An
    asyncio lock guards writes and snapshots; cache hits read the
    mapping directly so they never suspend.
    """

    def __init__(
        self,
        source: Optional[PriceSource] = None,
        *,
        single_flight: bool = True,
        fetch_timeout: Optional[float] = None,
        event_bus: Optional[Any] = None,
        metrics: Optional[PriceCacheMetrics] = None,
    ) -> None:
        """Initialize an empty cache.

        Args:
            source: Backend consulted on a miss.  Defaults to a
                ``StaticPriceSource`` with its default catalogue.
            single_flight: Share one in-flight fetch per product between
                concurrent callers.
            fetch_timeout: Optional timeout in seconds for each source call.
                A timed out fetch yields ``None`` and caches nothing.
            event_bus: Optional bus on which ``price_update`` events are
                published after a price is stored.
            metrics: Prometheus instrumentation; a private registry is
                used when omitted.
        """
        self.source: PriceSource = source if source is not None else StaticPriceSource()
        self.single_flight = single_flight
        self.fetch_timeout = fetch_timeout
        self.event_bus = event_bus
        self.metrics = metrics if metrics is not None else PriceCacheMetrics()
        self._entries: Dict[str, CacheEntry] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        self._lock = asyncio.Lock()

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def in_flight(self, product_id: str) -> bool:
        """Return True while a shared fetch for ``product_id`` is pending."""
        return product_id in self._pending

    async def get_price(self, product_id: str) -> Optional[float]:
        """Return the price of a product, fetching it on a miss.

        Args:
            product_id: The product identifier (e.g. ``"accord"``).

        Returns:
            The cached or freshly fetched price.  ``0.0`` when the source
            reported a zero price and ``None`` when it had no usable price;
            neither is cached.

        Raises:
            Exception: Whatever the source raised while fetching.  Every
                caller sharing that fetch receives the same exception.
        """
        entry = self._entries.get(product_id)
        if entry is not None:
            self.metrics.hits.inc()
            logger.debug("Cache hit for %s", product_id)
            return entry.price

        self.metrics.misses.inc()
        if not self.single_flight:
            return await self._fetch(product_id)

        task = self._pending.get(product_id)
        if task is None:
            task = asyncio.create_task(self._fetch(product_id))
            self._pending[product_id] = task
            self.metrics.in_flight.inc()
            task.add_done_callback(lambda done, key=product_id: self._forget(key, done))
        else:
            self.metrics.joined.inc()
            logger.debug("Joining in-flight fetch for %s", product_id)
        # A cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    def _forget(self, product_id: str, task: asyncio.Task) -> None:
        if self._pending.get(product_id) is task:
            del self._pending[product_id]
            self.metrics.in_flight.dec()
        # Every waiter may have been cancelled; mark the outcome as retrieved
        if not task.cancelled():
            task.exception()

    async def _call_source(self, product_id: str) -> Tuple[bool, Any]:
        """Return ``(timed_out, raw_price)`` for one source call.

        Exceptions raised by the source, including its own
        ``TimeoutError``, propagate unchanged.
        """
        if self.fetch_timeout is None:
            return False, await self.source.fetch_price(product_id)
        call = asyncio.ensure_future(self.source.fetch_price(product_id))
        try:
            done, _ = await asyncio.wait({call}, timeout=self.fetch_timeout)
        finally:
            if not call.done():
                call.cancel()
        if not done:
            return True, None
        return False, call.result()

    async def _fetch(self, product_id: str) -> Optional[float]:
        """Call the source once and store the result if it is cacheable."""
        self.metrics.fetches.inc()
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            timed_out, raw = await self._call_source(product_id)
        except Exception:
            self.metrics.failures.inc()
            logger.exception("Price source failed for %s", product_id)
            raise
        finally:
            self.metrics.fetch_seconds.observe(loop.time() - started)
        if timed_out:
            self.metrics.failures.inc()
            logger.warning("Price fetch for %s timed out after %.2fs", product_id, self.fetch_timeout)
            return None

        price = _coerce_price(raw)
        if price is None:
            self.metrics.failures.inc()
            if raw is None:
                logger.debug("No price available for %s", product_id)
            else:
                logger.warning("Ignoring invalid price %r for %s", raw, product_id)
            return None
        if price == 0:
            self.metrics.failures.inc()
            logger.debug("Zero price for %s; not caching", product_id)
            return price

        entry = CacheEntry(product_id=product_id, price=price)
        async with self._lock:
            self._entries[product_id] = entry
            self.metrics.entries.set(len(self._entries))
        logger.info("Cached price for %s: %.2f", product_id, price)
        if self.event_bus is not None:
            await self.event_bus.publish(PRICE_UPDATE_EVENT, entry.model_dump())
        return price

    async def all_prices(self) -> Dict[str, float]:
        """Snapshot all stored prices.

        Returns a copy of the current price map in insertion order.
        """
        async with self._lock:
            return {product_id: entry.price for product_id, entry in self._entries.items()}

    async def entries(self) -> List[CacheEntry]:
        """Snapshot the stored entries, oldest product first."""
        async with self._lock:
            return [entry.model_copy() for entry in self._entries.values()]
