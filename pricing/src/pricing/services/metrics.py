"""
Price Cache Metrics
===================

Prometheus instrumentation for the price cache.  Each
``PriceCacheMetrics`` instance registers its series on one
``CollectorRegistry``; when no registry is given a private one is
created so that several caches (for example in tests) can coexist
without duplicate registration errors.  Pass
``prometheus_client.REGISTRY`` to expose the series through
``start_http_server``.

Metrics
-------

* ``price_cache_hits_total`` – lookups answered from the cache.
* ``price_cache_misses_total`` – lookups that needed the source.
* ``price_source_fetches_total`` – calls actually made to the source.
* ``price_cache_joined_fetches_total`` – misses that joined a fetch
  already in flight instead of starting a new one.
* ``price_cache_fetch_failures_total`` – fetches that timed out, raised
  or returned no usable price.
* ``price_cache_entries`` – number of cached products.
* ``price_cache_in_flight`` – fetches currently pending.
* ``price_source_fetch_seconds`` – source latency histogram.
"""

from __future__ import annotations

import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)


class PriceCacheMetrics:
    """Counters and gauges describing cache behaviour."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.hits = Counter(
            "price_cache_hits",
            "Lookups served from the cache",
            registry=self.registry,
        )
        self.misses = Counter(
            "price_cache_misses",
            "Lookups that required the price source",
            registry=self.registry,
        )
        self.fetches = Counter(
            "price_source_fetches",
            "Calls made to the price source",
            registry=self.registry,
        )
        self.joined = Counter(
            "price_cache_joined_fetches",
            "Misses that joined an in-flight fetch",
            registry=self.registry,
        )
        self.failures = Counter(
            "price_cache_fetch_failures",
            "Fetches that produced no cacheable price",
            registry=self.registry,
        )
        self.entries = Gauge(
            "price_cache_entries",
            "Number of cached products",
            registry=self.registry,
        )
        self.in_flight = Gauge(
            "price_cache_in_flight",
            "Fetches currently pending",
            registry=self.registry,
        )
        self.fetch_seconds = Histogram(
            "price_source_fetch_seconds",
            "Price source latency in seconds",
            registry=self.registry,
        )


def start_metrics_server(port: int) -> None:
    """Expose the default registry over HTTP on ``port``."""
    try:
        start_http_server(port)
    except OSError as exc:
        # Likely already started in this process
        logger.warning("Failed to start Prometheus server on port %d: %s", port, exc)
    else:
        logger.info("Prometheus metrics available on port %d", port)
