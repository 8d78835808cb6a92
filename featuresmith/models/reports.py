"""
Report models derived from model output. Never persisted; recomputed on demand.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ComplexityFactors(BaseModel):
    """Four independent scores behind a scenario's complexity rating."""

    model_config = ConfigDict(populate_by_name=True)

    step_count: int = Field(default=0, alias="stepCount")
    data_dependencies: int = Field(default=0, alias="dataDependencies")
    conditional_logic: int = Field(default=0, alias="conditionalLogic")
    technical_difficulty: int = Field(default=0, alias="technicalDifficulty")


class ScenarioComplexity(BaseModel):
    """Complexity of a single scenario."""

    name: str = "Unnamed Scenario"
    complexity: int = Field(default=1, ge=1, le=10)
    factors: ComplexityFactors = Field(default_factory=ComplexityFactors)
    explanation: str = ""

    @computed_field
    @property
    def label(self) -> str:
        if self.complexity <= 3:
            return "Simple"
        if self.complexity <= 6:
            return "Moderate"
        return "Complex"


class ComplexityReport(BaseModel):
    """Per-scenario and overall complexity of a feature."""

    model_config = ConfigDict(populate_by_name=True)

    overall_complexity: int = Field(default=1, ge=1, le=10, alias="overallComplexity")
    scenarios: List[ScenarioComplexity] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class QualityReport(BaseModel):
    """Quality score and improvement hints for a feature."""

    model_config = ConfigDict(populate_by_name=True)

    quality_score: int = Field(default=0, ge=0, le=100, alias="qualityScore")
    suggestions: List[str] = Field(default_factory=list)
    improved_title: Optional[str] = Field(default=None, alias="improvedTitle")
