"""
Feature models: generation requests, persisted features and analytics events.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeatureRequest(BaseModel):
    """Transient input for one feature generation call."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(description="Feature title, also the source of the tag")
    story: str = Field(description="User story placed under the Feature line")
    scenario_count: int = Field(default=3, ge=1, alias="scenarioCount", description="Number of scenarios to generate")


class GeneratedFeature(BaseModel):
    """Normalized Gherkin text plus the canonical tag it carries."""

    content: str = Field(description="Gherkin feature file text")
    tag: str = Field(description="Canonical @tag derived from the title")
    warnings: list[str] = Field(default_factory=list, description="Structural issues found after normalization")


class Feature(BaseModel):
    """A generated feature as persisted by the feature store."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    story: str
    scenario_count: int = Field(alias="scenarioCount")
    generated_content: str = Field(default="", alias="generatedContent")
    manually_edited: bool = Field(default=False, alias="manuallyEdited")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class FeatureUpdate(BaseModel):
    """Partial update of a stored feature. Unset fields are left alone."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    story: Optional[str] = None
    scenario_count: Optional[int] = Field(default=None, ge=1, alias="scenarioCount")
    generated_content: Optional[str] = Field(default=None, alias="generatedContent")


class AnalyticsEvent(BaseModel):
    """One recorded generation attempt or feature view."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    event_type: str = Field(alias="eventType", description="feature_generation or feature_view")
    feature_id: Optional[int] = Field(default=None, alias="featureId")
    successful: bool = True
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    scenario_count: Optional[int] = Field(default=None, alias="scenarioCount")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
