"""
API routes for analytics events.
"""

from typing import List

from fastapi import APIRouter, Depends

from featuresmith.api.deps import get_workflow
from featuresmith.models.feature import AnalyticsEvent
from featuresmith.workflows.feature_workflow import FeatureWorkflow

router = APIRouter()


@router.get("", response_model=List[AnalyticsEvent])
async def get_analytics(workflow: FeatureWorkflow = Depends(get_workflow)):
    """All recorded generation and view events."""
    return workflow.get_analytics()
