"""
Unit tests for PerformanceMetrics.
"""

import pytest

from featuresmith.monitoring.metrics import PerformanceMetrics, get_metrics, tracked


@pytest.mark.asyncio
async def test_track_records_timing_and_errors():
    metrics = PerformanceMetrics()

    async with metrics.track("model.generate_feature"):
        pass
    with pytest.raises(RuntimeError):
        async with metrics.track("model.generate_feature"):
            raise RuntimeError("boom")

    stats = metrics.get_stats("model.generate_feature")
    assert stats["count"] == 2
    assert stats["errors"] == 1


def test_unknown_operation_stats():
    stats = PerformanceMetrics().get_stats("never.called")
    assert stats["count"] == 0
    assert stats["avg_time"] == 0


def test_summary():
    metrics = PerformanceMetrics()
    metrics.record_timing("a", 0.5)
    metrics.record_timing("b", 1.5)
    metrics.record_error("b")

    summary = metrics.get_summary()

    assert summary["total_operations"] == 2
    assert summary["total_errors"] == 1
    assert summary["slowest_operations"][0] == {"operation": "b", "avg_time": 1.5}
    assert summary["error_rate"] == 0.5


def test_reset():
    metrics = PerformanceMetrics()
    metrics.record_timing("a", 0.1)
    metrics.reset()
    assert metrics.get_stats() == {}


def test_get_metrics_is_a_singleton():
    assert get_metrics() is get_metrics()


@pytest.mark.asyncio
async def test_tracked_decorator():
    @tracked("workflow.sample")
    async def sample(value):
        return value * 2

    assert await sample(21) == 42
    assert sample.__name__ == "sample"
    assert get_metrics().get_stats("workflow.sample")["count"] == 1


@pytest.mark.asyncio
async def test_errors_are_grouped_by_type():
    metrics = PerformanceMetrics()

    for error in (ValueError("bad"), ValueError("worse"), TimeoutError("slow")):
        with pytest.raises(Exception):
            async with metrics.track("model.analyze_quality"):
                raise error

    assert metrics.get_stats("model.analyze_quality")["error_types"] == {"ValueError": 2, "TimeoutError": 1}


def test_p95_uses_nearest_rank():
    metrics = PerformanceMetrics()
    for duration in range(1, 21):
        metrics.record_timing("model.generate_feature", float(duration))

    stats = metrics.get_stats("model.generate_feature")

    assert stats["p95_time"] == 19.0
    assert stats["min_time"] == 1.0
    assert stats["max_time"] == 20.0
