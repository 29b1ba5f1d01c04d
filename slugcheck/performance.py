"""Timing metrics for Delivery API calls, detection and search runs."""

import time
from typing import Any, Dict

from slugcheck.utils.logger import log_info


class PerformanceMetrics:
    """Track performance metrics for the slug checker."""

    def __init__(self):
        self.metrics: Dict[str, Any] = {}
        self.start_times: Dict[str, float] = {}

    def start_timer(self, operation: str) -> None:
        """Start timing an operation."""
        self.start_times[operation] = time.time()

    def end_timer(self, operation: str) -> float:
        """End timing an operation and return duration."""
        if operation not in self.start_times:
            return 0.0

        duration = time.time() - self.start_times[operation]
        del self.start_times[operation]

        if operation not in self.metrics:
            self.metrics[operation] = []
        self.metrics[operation].append(duration)

        # Keep only last 100 measurements
        if len(self.metrics[operation]) > 100:
            self.metrics[operation] = self.metrics[operation][-100:]

        return duration

    def get_operation_stats(self, operation: str) -> Dict[str, float]:
        """Get statistics for a specific operation."""
        if operation not in self.metrics or not self.metrics[operation]:
            return {}

        durations = self.metrics[operation]
        return {
            "count": len(durations),
            "avg_ms": round(sum(durations) * 1000 / len(durations), 2),
            "min_ms": round(min(durations) * 1000, 2),
            "max_ms": round(max(durations) * 1000, 2),
            "total_ms": round(sum(durations) * 1000, 2),
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        """Get statistics for all operations."""
        return {op: self.get_operation_stats(op) for op in self.metrics.keys()}

    def log_performance_summary(self) -> None:
        """Log a performance summary."""
        stats = self.get_all_stats()
        if not stats:
            return

        log_info("Performance metrics summary")
        for operation, op_stats in stats.items():
            if op_stats:
                log_info(
                    f"  {operation}: {op_stats['count']} calls, "
                    f"avg {op_stats['avg_ms']}ms, "
                    f"max {op_stats['max_ms']}ms"
                )

    def reset(self) -> None:
        self.metrics.clear()
        self.start_times.clear()


performance_metrics = PerformanceMetrics()


def get_performance_metrics() -> PerformanceMetrics:
    """Get the global performance metrics instance."""
    return performance_metrics


def log_performance_summary() -> None:
    performance_metrics.log_performance_summary()
