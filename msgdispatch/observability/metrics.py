"""In-process dispatch metrics — no external deps."""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field


@dataclass
class DispatchMetrics:
    post_count: int = 0
    failure_count: int = 0
    category_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    latencies: list[int] = field(default_factory=list)
    _start_time: float = field(default_factory=time.time)

    def record_post(self, category: str, ok: bool = True, latency_ms: int = 0) -> None:
        self.post_count += 1
        self.category_counts[category] += 1
        if not ok:
            self.failure_count += 1
        if latency_ms:
            self.latencies.append(latency_ms)
            if len(self.latencies) > 1000:
                self.latencies = self.latencies[-500:]

    def summary(self) -> dict:
        avg_latency = sum(self.latencies) / len(self.latencies) if self.latencies else 0
        return {
            "uptime_seconds": int(time.time() - self._start_time),
            "total_posts": self.post_count,
            "failed_posts": self.failure_count,
            "categories": dict(self.category_counts),
            "avg_latency_ms": int(avg_latency),
        }
