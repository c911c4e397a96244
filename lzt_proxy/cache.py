"""Process-wide cache for assembled listing pages.

Entries live for a fixed TTL measured on an injectable clock. An expired
entry is never purged on its own; it is overwritten by the next put() for
the same key. With max_entries set the cache also evicts the least
recently used key once it grows past that size.
"""

import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

from .config import CACHE_TTL_SECONDS
from .models import CacheEntry


class ResultCache:
    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.ttl = ttl
        self._clock = clock
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None or self._clock() - entry.timestamp >= self.ttl:
            return None
        self._entries.move_to_end(key)
        return entry.payload

    def put(self, key: str, payload: Dict[str, Any]) -> None:
        self._entries[key] = CacheEntry(timestamp=self._clock(), payload=payload)
        self._entries.move_to_end(key)
        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
