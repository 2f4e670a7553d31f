"""Fake in‑memory event bus for testing.

Each call to ``publish(event_type, data)`` appends a tuple
``(event_type, data)`` to the ``events`` list so tests can assert on
what the price cache announced and in which order.
"""

from __future__ import annotations

from typing import Any, List, Tuple


class FakeBus:
    """A minimal event bus used for capturing events in tests."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    async def publish(self, event_type: str, data: Any) -> None:
        self.events.append((event_type, data))

    def of_type(self, event_type: str) -> List[Any]:
        return [data for kind, data in self.events if kind == event_type]
