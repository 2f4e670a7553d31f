"""
Domain models for cached prices using Pydantic.  A ``CacheEntry`` is
what the price cache stores for each product and what it publishes on
the event bus when a new price is learned.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """A price successfully fetched for one product."""

    product_id: str = Field(..., description="The product identifier, e.g. accord")
    price: float = Field(..., gt=0, description="Last price fetched from the source")
    fetched_at: float = Field(default_factory=time.time, description="Epoch seconds")
