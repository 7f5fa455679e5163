"""In-process response cache with lazy TTL expiry.

Entries are only evicted when a lookup finds them expired. Keys include the
inbound query string as sent, so the key space is client-controlled: a request
with novel params always misses, and its entry stays until that same key is
looked up again. Growth is not bounded.
"""

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from app.services.metrics import metrics_service

logger = logging.getLogger(__name__)

# Cache keys
CACHE_ENDPOINT_NBA_DATA = "nba-data"


def make_cache_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Build a key from endpoint and params, independent of param order."""
    serialized = json.dumps(dict(params or {}), sort_keys=True, separators=(",", ":"), default=str)
    return f"{endpoint}:{serialized}"


@dataclass
class CacheEntry:
    key: str
    payload: Any
    stored_at: float


class ResponseCache:
    """Time-bounded cache for transformed responses."""

    def __init__(
        self,
        ttl: float = 60,
        *,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.enabled = enabled
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str, track_metrics: bool = True) -> Any | None:
        if not self.enabled:
            return None

        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.stored_at < self.ttl:
            if track_metrics:
                metrics_service.track_cache_hit()
            return entry.payload

        if entry is not None:
            logger.debug(f"Cache entry expired for {key}")
            del self._entries[key]
        if track_metrics:
            metrics_service.track_cache_miss()
        return None

    def set(self, key: str, payload: Any) -> None:
        if not self.enabled:
            return
        self._entries[key] = CacheEntry(key=key, payload=payload, stored_at=self._clock())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
