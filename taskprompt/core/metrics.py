# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Template Metrics — Cache effectiveness and load latency for the loader.

One collector per container. The loader records every cache decision:
  - hit:       served from the cache
  - miss:      started a disk read
  - coalesced: joined a read already in flight
  - error:     a read finished without content
"""

from __future__ import annotations

import time
from typing import Any, Dict, List

# Samples kept for the latency summary
MAX_LATENCY_SAMPLES = 1000


class TemplateMetrics:
    """In-memory counters for one template cache."""

    def __init__(self) -> None:
        self._start_time = time.time()
        self.reset()

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.coalesced = 0
        self.errors = 0
        self.cache_size = 0
        self._load_ms: List[float] = []

    # ── Cache decisions ─────────────────────────────────────────

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def record_coalesced(self) -> None:
        self.coalesced += 1

    def record_error(self) -> None:
        self.errors += 1

    def set_cache_size(self, size: int) -> None:
        self.cache_size = size

    # ── Load latency ────────────────────────────────────────────

    def record_load(self, elapsed_ms: float) -> None:
        """Record the duration of one disk read."""
        self._load_ms.append(elapsed_ms)
        if len(self._load_ms) > MAX_LATENCY_SAMPLES:
            del self._load_ms[:-MAX_LATENCY_SAMPLES]

    @property
    def lookups(self) -> int:
        return self.hits + self.misses + self.coalesced

    @property
    def hit_ratio(self) -> float:
        """Share of lookups answered without a new read. 0.0 before any lookup."""
        if not self.lookups:
            return 0.0
        return (self.hits + self.coalesced) / self.lookups

    def load_latency(self) -> Dict[str, float]:
        samples = self._load_ms
        if not samples:
            return {"count": 0, "avg": 0.0, "max": 0.0, "min": 0.0}
        return {
            "count": len(samples),
            "avg": round(sum(samples) / len(samples), 2),
            "max": round(max(samples), 2),
            "min": round(min(samples), 2),
        }

    # ── Export ──────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": round(time.time() - self._start_time, 1),
            "cache": {
                "hits": self.hits,
                "misses": self.misses,
                "coalesced": self.coalesced,
                "errors": self.errors,
                "size": self.cache_size,
                "hit_ratio": round(self.hit_ratio, 4),
            },
            "load_ms": self.load_latency(),
        }
