"""
Feature generator: title + story + scenario count in, normalized Gherkin out.
Orchestrates Prompt Builder -> Model Invoker -> Output Normalizer.
"""

from typing import Optional

from loguru import logger

from featuresmith.core.exceptions import FeatureValidationError
from featuresmith.core.protocols import IModelInvoker
from featuresmith.models.feature import GeneratedFeature
from featuresmith.ai.generation.prompt_builder import PromptBuilder, feature_tag
from featuresmith.ai.model_invoker import ModelInvoker
from featuresmith.ai.output_normalizer import OutputNormalizer

OPERATION = "generate feature"


class FeatureGenerator:
    """
    AI-powered Gherkin feature generator.

    Dependencies are injected so a stub invoker can stand in for the model.
    """

    def __init__(
        self,
        invoker: Optional[IModelInvoker] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        normalizer: Optional[OutputNormalizer] = None,
    ):
        self.invoker = invoker or ModelInvoker()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.normalizer = normalizer or OutputNormalizer()

    async def generate(self, title: str, story: str, scenario_count: int) -> GeneratedFeature:
        """
        Generate a feature file and normalize its structure.

        Args:
            title: Feature title (source of the canonical tag)
            story: User story text
            scenario_count: Number of scenarios to request (>= 1)

        Returns:
            GeneratedFeature with content, tag and any structural warnings

        Raises:
            FeatureValidationError: If title or story is missing, or scenario_count < 1
            ModelInvocationError: If the model call fails
        """
        if not title or not title.strip():
            raise FeatureValidationError(OPERATION, "title is required")
        if not story or not story.strip():
            raise FeatureValidationError(OPERATION, "story is required")
        if scenario_count < 1:
            raise FeatureValidationError(OPERATION, "scenario count must be at least 1")

        logger.info(f"Generating feature '{title}' with {scenario_count} scenarios")

        system, prompt = self.prompt_builder.build_generation_prompt(title, story, scenario_count)
        raw_text = await self.invoker.generate_feature_text(system, prompt)

        content = self.normalizer.normalize(raw_text, title)
        warnings = self.normalizer.validate_structure(content, title, scenario_count)

        logger.info(f"Generated feature '{title}' ({len(content)} chars, {len(warnings)} warnings)")
        return GeneratedFeature(content=content, tag=feature_tag(title), warnings=warnings)

    async def generate_feature(self, title: str, story: str, scenario_count: int) -> str:
        """Generate and return only the Gherkin text."""
        generated = await self.generate(title, story, scenario_count)
        return generated.content
