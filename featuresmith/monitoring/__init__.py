"""
Monitoring and metrics tracking for FeatureSmith.
"""

from .metrics import PerformanceMetrics, get_metrics, tracked

__all__ = [
    'PerformanceMetrics',
    'get_metrics',
    'tracked',
]
