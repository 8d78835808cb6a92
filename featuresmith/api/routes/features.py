"""
API routes for feature generation, analysis and suggestions.
"""

from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel

from featuresmith.api.deps import get_workflow
from featuresmith.models.feature import Feature, FeatureRequest, FeatureUpdate
from featuresmith.models.reports import ComplexityReport, QualityReport
from featuresmith.workflows.feature_workflow import FeatureCreationResult, FeatureWorkflow

router = APIRouter()


class StoryRequest(BaseModel):
    """Request carrying a (possibly partial) user story."""
    story: str


class TitleSuggestionsResponse(BaseModel):
    titles: List[str]


class StorySuggestionsResponse(BaseModel):
    suggestions: List[str]


class TitleCheckResponse(BaseModel):
    exists: bool


@router.get("", response_model=List[Feature])
async def list_features(workflow: FeatureWorkflow = Depends(get_workflow)):
    """List all stored features."""
    return workflow.list_features()


@router.get("/check-title", response_model=TitleCheckResponse)
async def check_title(title: str, workflow: FeatureWorkflow = Depends(get_workflow)):
    """Report whether a feature with this title (case-insensitive) already exists."""
    return TitleCheckResponse(exists=workflow.title_exists(title))


@router.post("/generate", response_model=FeatureCreationResult)
async def generate_feature(request: FeatureRequest, workflow: FeatureWorkflow = Depends(get_workflow)):
    """
    Generate a feature file, score it, and store it.

    Returns the stored feature together with its complexity and quality reports.
    """
    logger.info(f"API: Generating feature '{request.title}' ({request.scenario_count} scenarios)")
    return await workflow.create_feature(request)


@router.post("/suggest-title", response_model=TitleSuggestionsResponse)
async def suggest_title(request: StoryRequest, workflow: FeatureWorkflow = Depends(get_workflow)):
    """Suggest up to 3 titles; stories under the minimum length get none."""
    return TitleSuggestionsResponse(titles=await workflow.suggest_titles(request.story))


@router.post("/suggest", response_model=StorySuggestionsResponse)
async def suggest_story_improvements(request: StoryRequest, workflow: FeatureWorkflow = Depends(get_workflow)):
    """Best-effort suggestions for improving a story."""
    return StorySuggestionsResponse(suggestions=await workflow.get_story_suggestions(request.story))


@router.get("/{feature_id}", response_model=Feature)
async def get_feature(feature_id: int, workflow: FeatureWorkflow = Depends(get_workflow)):
    return workflow.get_feature(feature_id, track_view=True)


@router.patch("/{feature_id}", response_model=Feature)
async def update_feature(
    feature_id: int,
    update: FeatureUpdate,
    workflow: FeatureWorkflow = Depends(get_workflow),
):
    """Update a feature; story or scenario changes regenerate unedited content."""
    logger.info(f"API: Updating feature {feature_id}")
    return await workflow.update_feature(feature_id, update)


@router.post("/{feature_id}/analyze", response_model=QualityReport)
async def analyze_feature(feature_id: int, workflow: FeatureWorkflow = Depends(get_workflow)):
    """Recompute the quality report of a stored feature."""
    return await workflow.analyze_feature(feature_id)


@router.post("/{feature_id}/complexity", response_model=ComplexityReport)
async def analyze_feature_complexity(feature_id: int, workflow: FeatureWorkflow = Depends(get_workflow)):
    """Recompute the complexity report of a stored feature."""
    return await workflow.analyze_feature_complexity(feature_id)
