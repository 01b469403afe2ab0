from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class CacheEntry(BaseModel, Generic[T]):
    """Storage envelope for one cached value. Never handed to callers."""

    model_config = {"frozen": True}

    data: T
    timestamp: float  # Creation time, seconds on the cache's clock
    ttl: int  # Seconds

    @property
    def expires_at(self) -> float:
        return self.timestamp + self.ttl

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheStats(BaseModel):
    keys: int
    hits: int
    misses: int
    ksize: int
    vsize: int
