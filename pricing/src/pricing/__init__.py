"""
Pricing package: a caching proxy in front of a slow price source.

Callers build an explicit ``PriceCache`` (usually via
``build_price_cache``) and share that instance; there is no module-level
cache.  See ``pricing.services.price_cache`` for the lookup semantics.
"""

from __future__ import annotations

from typing import Any, Optional

from .config import PriceCacheSettings
from .models import CacheEntry  # noqa: F401
from .services import EventBus, PriceCache, PriceCacheMetrics, PriceSource, StaticPriceSource  # noqa: F401


def build_price_cache(
    settings: Optional[PriceCacheSettings] = None,
    source: Optional[PriceSource] = None,
    event_bus: Optional[Any] = None,
    metrics: Optional[PriceCacheMetrics] = None,
) -> PriceCache:
    """Construct a price cache from settings.

    Args:
        settings: Configuration; read from the environment when omitted.
        source: Price backend; a ``StaticPriceSource`` using
            ``settings.source_delay`` when omitted.
        event_bus: Optional bus for ``price_update`` events.
        metrics: Optional Prometheus instrumentation.
    """
    if settings is None:
        settings = PriceCacheSettings.from_env()
    if source is None:
        source = StaticPriceSource(delay=settings.source_delay)
    return PriceCache(
        source,
        single_flight=settings.single_flight,
        fetch_timeout=settings.fetch_timeout,
        event_bus=event_bus,
        metrics=metrics,
    )
