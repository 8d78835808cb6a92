"""
Performance monitoring for pipeline operations.
Tracks per-operation timings and error counts in process memory.
"""

import math
import time
from contextlib import asynccontextmanager
from functools import wraps
from typing import Any, Dict, List, Optional

from loguru import logger


class PerformanceMetrics:
    """
    Tracks wall-clock time and failures of model calls and pipeline steps.

    Failures are also broken down by exception type, so a run can tell
    transport failures (ModelInvocationError) from unusable model output
    (ModelResponseError).
    """

    def __init__(self):
        self.timings: Dict[str, List[float]] = {}
        self.operation_counts: Dict[str, int] = {}
        self.errors: Dict[str, int] = {}
        self.error_types: Dict[str, Dict[str, int]] = {}
        self.start_time = time.time()

    def record_timing(self, operation: str, duration: float):
        """
        Record timing for an operation.

        Args:
            operation: Operation name (e.g. 'model.analyze_quality')
            duration: Duration in seconds
        """
        self.timings.setdefault(operation, []).append(duration)
        self.operation_counts[operation] = self.operation_counts.get(operation, 0) + 1

    def record_error(self, operation: str, error_type: str = "Exception"):
        """Record a failed operation and the exception class that ended it."""
        self.errors[operation] = self.errors.get(operation, 0) + 1
        by_type = self.error_types.setdefault(operation, {})
        by_type[error_type] = by_type.get(error_type, 0) + 1

    @asynccontextmanager
    async def track(self, operation: str):
        """
        Context manager to track operation timing.

        Usage:
            async with metrics.track('model.generate_feature'):
                text = await client.chat.completions.create(...)
        """
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.record_error(operation, type(e).__name__)
            raise
        finally:
            self.record_timing(operation, time.perf_counter() - start)

    def get_stats(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """
        Get statistics for one operation, or for all of them keyed by name.
        """
        if operation:
            return self._get_operation_stats(operation)
        return {op: self._get_operation_stats(op) for op in self.timings}

    def _get_operation_stats(self, operation: str) -> Dict[str, Any]:
        timings = sorted(self.timings.get(operation, []))
        stats: Dict[str, Any] = {
            'count': len(timings),
            'total_time': 0,
            'avg_time': 0,
            'min_time': 0,
            'max_time': 0,
            'p95_time': 0,
            'errors': self.errors.get(operation, 0),
            'error_types': dict(self.error_types.get(operation, {})),
        }
        if not timings:
            return stats

        total_time = sum(timings)
        # nearest-rank percentile
        p95_index = max(0, math.ceil(0.95 * len(timings)) - 1)
        stats.update({
            'total_time': round(total_time, 3),
            'avg_time': round(total_time / len(timings), 3),
            'min_time': round(timings[0], 3),
            'max_time': round(timings[-1], 3),
            'p95_time': round(timings[p95_index], 3),
        })
        return stats

    def get_summary(self) -> Dict[str, Any]:
        """Process-wide totals plus the five slowest operations by mean duration."""
        means = {op: sum(values) / len(values) for op, values in self.timings.items() if values}
        slowest = sorted(means, key=means.get, reverse=True)[:5]
        total_operations = sum(self.operation_counts.values())
        total_errors = sum(self.errors.values())

        return {
            'total_operations': total_operations,
            'total_errors': total_errors,
            'error_rate': round(total_errors / total_operations, 3) if total_operations else 0,
            'uptime_seconds': round(time.time() - self.start_time, 3),
            'slowest_operations': [{'operation': op, 'avg_time': round(means[op], 3)} for op in slowest],
            'operations': sorted(self.timings),
        }

    def log_summary(self):
        """Write one line per tracked operation to the log."""
        summary = self.get_summary()
        logger.info(
            f"Performance: {summary['total_operations']} operations, "
            f"{summary['total_errors']} errors in {summary['uptime_seconds']}s"
        )
        for operation, op_stats in self.get_stats().items():
            logger.info(
                f"  {operation}: count={op_stats['count']} avg={op_stats['avg_time']}s "
                f"p95={op_stats['p95_time']}s errors={op_stats['errors']} {op_stats['error_types'] or ''}"
            )

    def reset(self):
        """Reset all metrics."""
        self.timings.clear()
        self.operation_counts.clear()
        self.errors.clear()
        self.error_types.clear()
        self.start_time = time.time()


# Global metrics instance
_metrics_instance: Optional[PerformanceMetrics] = None


def get_metrics() -> PerformanceMetrics:
    """Process-wide tracker, created on first use."""
    global _metrics_instance
    if _metrics_instance is None:
        _metrics_instance = PerformanceMetrics()
    return _metrics_instance


def tracked(operation: str):
    """
    Decorator to track async function performance.

    Usage:
        @tracked('workflow.create_feature')
        async def create_feature(self, request):
            ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            async with get_metrics().track(operation):
                return await func(*args, **kwargs)
        return wrapper
    return decorator
