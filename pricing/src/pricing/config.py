"""
Runtime configuration for the price cache.

Settings are read from environment variables, the same way the rest of
the package reads its configuration, and validated with Pydantic so
that a bad value fails at startup instead of on the first lookup.

* ``PRICE_SOURCE_DELAY`` – simulated latency of the static price source
  in seconds (default ``2.0``).
* ``PRICE_FETCH_TIMEOUT`` – optional per-fetch timeout in seconds.  When
  unset or empty, fetches may take as long as the source needs.
* ``PRICE_SINGLE_FLIGHT`` – when true (default), concurrent lookups for
  the same uncached product share a single fetch.
* ``METRICS_ENABLE`` – start the Prometheus HTTP server from ``main``.
* ``PROMETHEUS_PORT`` – port for the metrics endpoint (default ``9108``).
* ``LOG_LEVEL`` – root log level used by ``main`` (default ``INFO``).
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field

_TRUTHY = {"true", "1", "yes"}

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


class PriceCacheSettings(BaseModel):
    """Validated settings for building a price cache."""

    source_delay: float = Field(2.0, ge=0, description="Simulated source latency in seconds")
    fetch_timeout: Optional[float] = Field(None, gt=0, description="Per-fetch timeout in seconds")
    single_flight: bool = Field(True, description="Share one in-flight fetch per product")
    metrics_enable: bool = False
    prometheus_port: int = Field(9108, gt=0, lt=65536)
    log_level: LogLevel = "INFO"

    @classmethod
    def from_env(cls) -> "PriceCacheSettings":
        """Build settings from the process environment.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        timeout = os.getenv("PRICE_FETCH_TIMEOUT", "").strip()
        return cls(
            source_delay=os.getenv("PRICE_SOURCE_DELAY", "2.0"),
            fetch_timeout=timeout or None,
            single_flight=_env_flag("PRICE_SINGLE_FLIGHT", "true"),
            metrics_enable=_env_flag("METRICS_ENABLE", "false"),
            prometheus_port=os.getenv("PROMETHEUS_PORT", "9108"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
