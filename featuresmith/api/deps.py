"""
FastAPI dependencies.
"""

from functools import lru_cache

from featuresmith.workflows.feature_workflow import FeatureWorkflow


@lru_cache
def get_workflow() -> FeatureWorkflow:
    """Process-wide workflow (one model client, one store)."""
    return FeatureWorkflow()
