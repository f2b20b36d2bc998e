"""metadata.cache
Time-boxed response cache used by the gateway.

Entries are never swept; an expired entry simply stops answering reads
and gets overwritten by the next successful fetch for the same key.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional


def make_cache_key(operation: str, params: Mapping[str, Any] | None = None) -> str:
    """Deterministic key: operation name + sorted, compact JSON of *params*.

    ``None`` values are dropped so ``{"genre": None}`` and ``{}`` collide.
    """
    clean = {k: v for k, v in (params or {}).items() if v is not None}
    return f"{operation}:{json.dumps(clean, sort_keys=True, separators=(',', ':'))}"


@dataclass(slots=True)
class CacheEntry:
    key: str
    value: Any
    stored_at: float


class TTLCache:
    """Key → last good payload, valid for *ttl* seconds after insertion."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def lookup(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for *key* if present and fresh, else **None**."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl:
            return None
        return entry

    def set(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, stored_at=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.lookup(key) is not None
