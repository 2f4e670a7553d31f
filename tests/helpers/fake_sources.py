"""Fake price sources for cache tests.

``CountingPriceSource`` answers from a mapping like the static source
but records every call, and can be held open with an ``asyncio.Event``
so tests control exactly when a fetch completes.  ``FailingPriceSource``
raises on every call.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional


class CountingPriceSource:
    """Price source that records the products it was asked for."""

    def __init__(
        self,
        prices: Optional[Mapping[str, Any]] = None,
        delay: float = 0.0,
        gate: Optional[asyncio.Event] = None,
    ) -> None:
        self.prices: Dict[str, Any] = dict(prices or {})
        self.delay = delay
        self.gate = gate
        self.calls: List[str] = []

    def count(self, product_id: str) -> int:
        return self.calls.count(product_id)

    async def fetch_price(self, product_id: str) -> Optional[Any]:
        self.calls.append(product_id)
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(self.delay)
        return self.prices.get(product_id)


class FailingPriceSource:
    """Price source whose backend is down."""

    def __init__(self, exc: Optional[Exception] = None, gate: Optional[asyncio.Event] = None) -> None:
        self.exc = exc or ConnectionError("price backend unavailable")
        self.gate = gate
        self.calls = 0

    async def fetch_price(self, product_id: str) -> Optional[float]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        raise self.exc
