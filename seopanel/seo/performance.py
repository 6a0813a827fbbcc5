"""Timing collection for reconciliation operations"""
import logging
import time
from collections import deque
from contextlib import asynccontextmanager
from dataclasses import dataclass, asdict, field
from datetime import datetime, timedelta, timezone
from typing import Any, Deque, Dict, List, Optional

from seopanel.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class OperationMetric:
    """One timed operation"""
    operation: str
    kind: str
    duration_ms: float
    success: bool
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["recorded_at"] = self.recorded_at.isoformat()
        return data


class PerformanceMonitor:
    """
    Bounded in-process history of operation timings.

    Informational only: nothing in the reconciliation path depends on it.
    """

    def __init__(self, history_size: Optional[int] = None, slow_threshold_ms: Optional[float] = None):
        self.slow_threshold_ms = slow_threshold_ms or settings.slow_operation_threshold_ms
        self._history: Deque[OperationMetric] = deque(maxlen=history_size or settings.performance_history_size)

    def record(
        self,
        operation: str,
        kind: str,
        duration_ms: float,
        success: bool = True,
        error: Optional[str] = None,
    ) -> OperationMetric:
        metric = OperationMetric(operation=operation, kind=kind, duration_ms=duration_ms, success=success, error=error)
        self._history.append(metric)
        if duration_ms >= self.slow_threshold_ms:
            logger.warning(f"Slow {kind} operation {operation}: {duration_ms:.1f}ms")
        return metric

    @asynccontextmanager
    async def track(self, operation: str, kind: str = "service"):
        """Time the wrapped block; exceptions are recorded and re-raised"""
        started = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.record(operation, kind, (time.perf_counter() - started) * 1000, success=False, error=str(e))
            raise
        self.record(operation, kind, (time.perf_counter() - started) * 1000)

    def _window(self, minutes: Optional[int]) -> List[OperationMetric]:
        if not minutes:
            return list(self._history)
        since = datetime.now(timezone.utc) - timedelta(minutes=minutes)
        return [metric for metric in self._history if metric.recorded_at >= since]

    def get_stats(self, window_minutes: Optional[int] = 60) -> Dict[str, Any]:
        """Aggregate timings over the last `window_minutes` minutes"""
        metrics = self._window(window_minutes)
        if not metrics:
            return {
                "total_operations": 0,
                "average_ms": 0.0,
                "success_rate": 1.0,
                "slow_operations": 0,
                "by_operation": {},
                "by_kind": {},
            }

        by_operation: Dict[str, Dict[str, Any]] = {}
        by_kind: Dict[str, int] = {}
        for metric in metrics:
            bucket = by_operation.setdefault(
                metric.operation, {"count": 0, "total_ms": 0.0, "max_ms": 0.0, "errors": 0}
            )
            bucket["count"] += 1
            bucket["total_ms"] += metric.duration_ms
            bucket["max_ms"] = max(bucket["max_ms"], metric.duration_ms)
            if not metric.success:
                bucket["errors"] += 1
            by_kind[metric.kind] = by_kind.get(metric.kind, 0) + 1

        for bucket in by_operation.values():
            bucket["average_ms"] = round(bucket.pop("total_ms") / bucket["count"], 2)
            bucket["max_ms"] = round(bucket["max_ms"], 2)

        successes = sum(1 for metric in metrics if metric.success)
        return {
            "total_operations": len(metrics),
            "average_ms": round(sum(metric.duration_ms for metric in metrics) / len(metrics), 2),
            "success_rate": round(successes / len(metrics), 4),
            "slow_operations": sum(1 for metric in metrics if metric.duration_ms >= self.slow_threshold_ms),
            "by_operation": by_operation,
            "by_kind": by_kind,
        }

    def get_slow_operations(self, threshold_ms: Optional[float] = None, limit: int = 10) -> List[Dict[str, Any]]:
        """Slowest operations at or above the threshold"""
        threshold = self.slow_threshold_ms if threshold_ms is None else threshold_ms
        slow = [metric for metric in self._history if metric.duration_ms >= threshold]
        slow.sort(key=lambda metric: metric.duration_ms, reverse=True)
        return [metric.to_dict() for metric in slow[:limit]]

    def get_recommendations(self, cache_hit_rate: Optional[float] = None) -> List[str]:
        stats = self.get_stats(window_minutes=None)
        recommendations: List[str] = []
        if not stats["total_operations"]:
            return recommendations

        if stats["average_ms"] >= self.slow_threshold_ms:
            recommendations.append(
                f"Average operation time is {stats['average_ms']}ms; review database indexes on seo_pages and redirects"
            )
        if stats["success_rate"] < 0.95:
            recommendations.append("More than 5% of operations fail; check the application log for persistence errors")
        for name, bucket in stats["by_operation"].items():
            if bucket["average_ms"] >= self.slow_threshold_ms:
                recommendations.append(f"Operation '{name}' averages {bucket['average_ms']}ms")
        if cache_hit_rate is not None and cache_hit_rate < 0.5 and stats["by_operation"].get("list_pages"):
            recommendations.append("Cache hit rate is below 50%; consider warming the listing cache")
        return recommendations

    def clear(self) -> None:
        self._history.clear()

    def export_data(self) -> Dict[str, Any]:
        return {
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "slow_threshold_ms": self.slow_threshold_ms,
            "metrics": [metric.to_dict() for metric in self._history],
        }


performance_monitor = PerformanceMonitor()
