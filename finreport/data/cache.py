"""
Time-boxed in-memory cache.

One slot per resource name (only "organizations" is used today). An entry is
valid while it holds data and is younger than its duration; there is no other
eviction.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger("finreport.data.cache")

ORGANIZATIONS = "organizations"


@dataclass
class CacheEntry:
    data: Any = None
    timestamp: float = 0.0  # epoch ms
    duration: int = 30000   # ms

    def is_valid(self, now_ms: float) -> bool:
        return self.data is not None and (now_ms - self.timestamp) < self.duration


class CacheStore:
    def __init__(self, duration_ms: int = 30000, clock: Optional[Callable[[], float]] = None):
        self.duration_ms = duration_ms
        # clock returns seconds, like time.time
        self._clock = clock or time.time
        self._entries: dict[str, CacheEntry] = {ORGANIZATIONS: self._empty()}

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def _empty(self) -> CacheEntry:
        return CacheEntry(data=None, timestamp=0.0, duration=self.duration_ms)

    def is_valid(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.is_valid(self._now_ms())

    def get(self, key: str) -> Any:
        """Cached data, or None when the slot is empty or expired."""
        if not self.is_valid(key):
            return None
        return self._entries[key].data

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, timestamp=self._now_ms(), duration=self.duration_ms)

    def clear(self, key: Optional[str] = None) -> None:
        if key:
            self._entries[key] = self._empty()
        else:
            self._entries = {k: self._empty() for k in self._entries}
        logger.info(f"Cache cleared: {key or 'all'}")

    def entry(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)
