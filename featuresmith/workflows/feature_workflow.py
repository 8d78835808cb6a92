"""
Feature workflow: the request-level flows that call the generation pipeline
and persist its results.

Create: generate -> complexity -> quality, awaited in sequence. The feature is
stored only after all three succeed; every attempt (other than invalid input)
is recorded as an analytics event.
"""

from typing import List, Optional

from loguru import logger
from pydantic import BaseModel

from featuresmith.core.exceptions import FeatureNotFoundError, FeatureSmithError, FeatureValidationError
from featuresmith.core.protocols import IFeatureStore, IModelInvoker
from featuresmith.models.feature import AnalyticsEvent, Feature, FeatureRequest, FeatureUpdate
from featuresmith.models.reports import ComplexityReport, QualityReport
from featuresmith.ai.complexity_scorer import ComplexityScorer
from featuresmith.ai.feature_generator import FeatureGenerator
from featuresmith.ai.model_invoker import ModelInvoker
from featuresmith.ai.quality_analyzer import QualityAnalyzer
from featuresmith.ai.story_advisor import StoryAdvisor
from featuresmith.ai.title_suggester import TitleSuggester
from featuresmith.monitoring.metrics import tracked
from featuresmith.storage.feature_store import FeatureStore


class FeatureCreationResult(BaseModel):
    """Stored feature plus the reports computed while creating it."""

    feature: Feature
    complexity: ComplexityReport
    analysis: QualityReport


class FeatureWorkflow:
    """Orchestrates feature creation, updates and on-demand analysis."""

    def __init__(
        self,
        store: Optional[IFeatureStore] = None,
        invoker: Optional[IModelInvoker] = None,
        generator: Optional[FeatureGenerator] = None,
        complexity_scorer: Optional[ComplexityScorer] = None,
        quality_analyzer: Optional[QualityAnalyzer] = None,
        title_suggester: Optional[TitleSuggester] = None,
        story_advisor: Optional[StoryAdvisor] = None,
    ):
        """
        Initialize the workflow.

        Args:
            store: Feature store (defaults to the JSON file store)
            invoker: Model invoker shared by every component that is not passed in
            generator, complexity_scorer, quality_analyzer, title_suggester, story_advisor:
                Optional pre-built components
        """
        components = (generator, complexity_scorer, quality_analyzer, title_suggester, story_advisor)
        if invoker is None and any(component is None for component in components):
            invoker = ModelInvoker()

        self.store = store or FeatureStore()
        self.generator = generator or FeatureGenerator(invoker=invoker)
        self.complexity_scorer = complexity_scorer or ComplexityScorer(invoker=invoker)
        self.quality_analyzer = quality_analyzer or QualityAnalyzer(invoker=invoker)
        self.title_suggester = title_suggester or TitleSuggester(invoker=invoker)
        self.story_advisor = story_advisor or StoryAdvisor(invoker=invoker)

    @tracked("workflow.create_feature")
    async def create_feature(self, request: FeatureRequest) -> FeatureCreationResult:
        """
        Generate, analyze and store a new feature.

        Raises:
            FeatureValidationError: On missing title/story (no event recorded)
            PipelineError: If any model step fails (nothing is stored)
        """
        logger.info(f"Creating feature '{request.title}'")
        event = AnalyticsEvent(
            event_type="feature_generation",
            scenario_count=request.scenario_count,
            successful=False,
        )

        try:
            generated = await self.generator.generate(request.title, request.story, request.scenario_count)
            complexity = await self.complexity_scorer.analyze(generated.content)
            analysis = await self.quality_analyzer.analyze(generated.content, request.title)
        except FeatureValidationError:
            raise
        except FeatureSmithError as e:
            self.store.log_analytics_event(event.model_copy(update={"error_message": e.message}))
            raise

        feature = self.store.create_feature(
            title=request.title,
            story=request.story,
            scenario_count=request.scenario_count,
            generated_content=generated.content,
        )
        self.store.log_analytics_event(event.model_copy(update={"successful": True, "feature_id": feature.id}))

        logger.info(f"Created feature {feature.id} (quality={analysis.quality_score}, complexity={complexity.overall_complexity})")
        return FeatureCreationResult(feature=feature, complexity=complexity, analysis=analysis)

    def get_feature(self, feature_id: int, track_view: bool = False) -> Feature:
        feature = self.store.get_feature(feature_id)
        if feature is None:
            raise FeatureNotFoundError(feature_id)
        if track_view:
            self.store.log_analytics_event(AnalyticsEvent(event_type="feature_view", feature_id=feature_id))
        return feature

    def list_features(self) -> List[Feature]:
        return self.store.list_features()

    def title_exists(self, title: str) -> bool:
        return bool(title and title.strip()) and self.store.find_feature_by_title(title) is not None

    async def update_feature(self, feature_id: int, update: FeatureUpdate) -> Feature:
        """
        Apply a partial update.

        Supplying generated content marks the feature as manually edited.
        Changing the story or scenario count regenerates the content, unless
        the feature was manually edited. Regeneration happens before anything
        is written, so a failed model call leaves the feature untouched.
        """
        existing = self.get_feature(feature_id)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)

        if "generated_content" in changes:
            changes["manually_edited"] = True
        else:
            story = changes.get("story", existing.story)
            scenario_count = changes.get("scenario_count", existing.scenario_count)
            inputs_changed = story != existing.story or scenario_count != existing.scenario_count
            if inputs_changed and not existing.manually_edited:
                title = changes.get("title", existing.title)
                logger.info(f"Regenerating feature {feature_id} after story/scenario change")
                changes["generated_content"] = await self.generator.generate_feature(title, story, scenario_count)
                changes["manually_edited"] = False

        if not changes:
            return existing

        feature = self.store.update_feature(feature_id, **changes)
        if feature is None:
            raise FeatureNotFoundError(feature_id)
        return feature

    async def analyze_feature(self, feature_id: int) -> QualityReport:
        """Recompute the quality report of a stored feature."""
        feature = self.get_feature(feature_id)
        return await self.quality_analyzer.analyze(feature.generated_content, feature.title)

    async def analyze_feature_complexity(self, feature_id: int) -> ComplexityReport:
        """Recompute the complexity report of a stored feature."""
        feature = self.get_feature(feature_id)
        return await self.complexity_scorer.analyze(feature.generated_content)

    async def suggest_titles(self, story: str) -> List[str]:
        """Titles for a story; short stories return [] without a model call."""
        if not self.title_suggester.should_suggest(story):
            logger.debug(f"Story too short for title suggestions ({len((story or '').strip())} chars)")
            return []
        return await self.title_suggester.suggest(story)

    async def get_story_suggestions(self, story: str) -> List[str]:
        return await self.story_advisor.get_suggestions(story)

    def get_analytics(self) -> List[AnalyticsEvent]:
        return self.store.get_analytics()
