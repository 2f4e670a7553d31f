"""Service layer for the pricing package.

This package exposes the price source, the price cache in front of it,
and the supporting event bus and metrics.
"""

from .event_bus import EventBus  # noqa: F401
from .metrics import PriceCacheMetrics  # noqa: F401
from .price_cache import PriceCache  # noqa: F401
from .price_source import PriceSource, StaticPriceSource  # noqa: F401
