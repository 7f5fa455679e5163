"""Metrics service for tracking API usage and performance."""

import logging
from collections import Counter
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

# Counter names
KEY_REQUEST_COUNT = "requests"
KEY_ERROR_COUNT = "errors"
KEY_LATENCY_SUM = "latency_sum"
KEY_LATENCY_COUNT = "latency_count"
KEY_CACHE_HITS = "cache_hits"
KEY_CACHE_MISSES = "cache_misses"
KEY_API_CALLS = "api_calls"


class MetricsService:
    """In-process counters, reset on restart."""

    def __init__(self):
        self._counters: Counter[str] = Counter()
        self._last_reset: datetime | None = None

    def increment(self, key: str, amount: int = 1) -> None:
        self._counters[key] += amount

    def get_value(self, key: str) -> int:
        return self._counters[key]

    def track_request(self) -> None:
        """Track an API request."""
        self.increment(KEY_REQUEST_COUNT)

    def track_error(self) -> None:
        """Track an API error."""
        self.increment(KEY_ERROR_COUNT)

    def track_latency(self, latency_ms: float) -> None:
        """Track request latency."""
        self.increment(KEY_LATENCY_SUM, int(latency_ms))
        self.increment(KEY_LATENCY_COUNT)

    def track_cache_hit(self) -> None:
        self.increment(KEY_CACHE_HITS)

    def track_cache_miss(self) -> None:
        self.increment(KEY_CACHE_MISSES)

    def track_api_call(self) -> None:
        """Track an external API call."""
        self.increment(KEY_API_CALLS)

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics."""
        requests = self.get_value(KEY_REQUEST_COUNT)
        errors = self.get_value(KEY_ERROR_COUNT)
        latency_sum = self.get_value(KEY_LATENCY_SUM)
        latency_count = self.get_value(KEY_LATENCY_COUNT)
        cache_hits = self.get_value(KEY_CACHE_HITS)
        cache_misses = self.get_value(KEY_CACHE_MISSES)

        # Calculate averages
        avg_latency = latency_sum / latency_count if latency_count > 0 else 0
        cache_total = cache_hits + cache_misses
        cache_hit_rate = (cache_hits / cache_total * 100) if cache_total > 0 else 0
        error_rate = (errors / requests * 100) if requests > 0 else 0

        return {
            "requests": {
                "total": requests,
                "errors": errors,
                "error_rate_percent": round(error_rate, 2),
            },
            "latency": {
                "avg_ms": round(avg_latency, 2),
                "samples": latency_count,
            },
            "cache": {
                "hits": cache_hits,
                "misses": cache_misses,
                "hit_rate_percent": round(cache_hit_rate, 2),
            },
            "external_api": {
                "calls": self.get_value(KEY_API_CALLS),
            },
            "last_reset": self._last_reset.isoformat() if self._last_reset else None,
            "collected_at": datetime.now().isoformat(),
        }

    def reset(self) -> None:
        """Reset all metrics."""
        self._counters.clear()
        self._last_reset = datetime.now()
        logger.info("Metrics reset")


metrics_service = MetricsService()
