"""
Protocol interfaces for dependency inversion.
Defines contracts for the model invoker and the feature store so tests and
collaborators can swap in their own implementations.
"""

from typing import List, Optional, Protocol

from featuresmith.models.feature import AnalyticsEvent, Feature


class IModelInvoker(Protocol):
    """One method per model call type; each returns the raw completion text."""

    async def generate_feature_text(self, system: str, prompt: str) -> str:
        """Free-text Gherkin generation."""
        ...

    async def analyze_quality(self, system: str, prompt: str) -> str:
        """JSON quality analysis."""
        ...

    async def analyze_complexity(self, system: str, prompt: str) -> str:
        """JSON complexity analysis."""
        ...

    async def suggest_titles(self, system: str, prompt: str) -> str:
        """JSON title suggestions."""
        ...

    async def suggest_improvements(self, system: str, prompt: str) -> str:
        """JSON story improvement suggestions."""
        ...


class IFeatureStore(Protocol):
    """Interface for feature and analytics persistence."""

    def create_feature(
        self, title: str, story: str, scenario_count: int, generated_content: str
    ) -> Feature:
        """Persist a new feature and return it with its identifier."""
        ...

    def get_feature(self, feature_id: int) -> Optional[Feature]:
        """Get a feature by id, or None."""
        ...

    def list_features(self) -> List[Feature]:
        """All stored features, oldest first."""
        ...

    def update_feature(self, feature_id: int, **changes) -> Optional[Feature]:
        """Apply field changes and return the updated feature, or None."""
        ...

    def find_feature_by_title(self, title: str) -> Optional[Feature]:
        """Case-insensitive title lookup."""
        ...

    def log_analytics_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Record an analytics event and return it with its identifier."""
        ...

    def get_analytics(self) -> List[AnalyticsEvent]:
        """All recorded analytics events."""
        ...
