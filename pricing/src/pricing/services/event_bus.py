"""
In‑memory event bus used to announce newly cached prices.

The price cache publishes a ``price_update`` event whenever it stores a
price.  Events are kept on one asyncio queue per event type; a
subscriber acknowledges an event by asking for the next one, which lets
a publisher wait with ``join`` until everything it published has been
handled.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any, AsyncIterator, Dict


class EventBus:
    """Per-event-type queues with acknowledgement on consumption."""

    def __init__(self) -> None:
        self._queues: Dict[str, asyncio.Queue] = defaultdict(asyncio.Queue)

    async def publish(self, event_type: str, data: Any) -> None:
        await self._queues[event_type].put(data)

    async def subscribe(self, event_type: str) -> AsyncIterator[Any]:
        """Yield events of ``event_type``; each is acknowledged once the
        subscriber comes back for the next one."""
        queue = self._queues[event_type]
        while True:
            data = await queue.get()
            try:
                yield data
            finally:
                queue.task_done()

    async def join(self, event_type: str) -> None:
        """Wait until every published ``event_type`` event was handled."""
        await self._queues[event_type].join()

    def pending(self, event_type: str) -> int:
        """Number of events published but not yet picked up."""
        return self._queues[event_type].qsize()
